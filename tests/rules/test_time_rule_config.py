from __future__ import annotations

import dataclasses
from datetime import time

import pytest

from config.config import time_rules_from_env
from src.hr_payroll.hr_payroll.core.exceptions import ConfigurationError
from src.hr_payroll.hr_payroll.rules.builder import TimeRuleConfigBuilder, build_config


def test_defaults_match_standard_rules():
    cfg = build_config()

    assert cfg.standard_start_time == time(7, 30)
    assert cfg.standard_end_time == time(16, 30)
    assert cfg.friday_end_time == time(13, 0)
    assert cfg.clock1_max_time == time(11, 50)
    assert (cfg.clock2_window_start, cfg.clock2_window_end) == (time(12, 0), time(12, 10))
    assert (cfg.clock3_window_start, cfg.clock3_window_end) == (time(12, 10), time(13, 0))
    assert cfg.clock4_min_time == time(13, 5)
    assert cfg.standard_lunch_minutes == 30
    assert cfg.apply_lunch_on_friday is False
    assert cfg.main_clock_duplicate_minutes == 2
    assert cfg.early_arrival_flag_minutes is None


def test_string_overrides_are_coerced():
    cfg = TimeRuleConfigBuilder({"grace_minutes": "10", "standard_start_time": "08:00"}).build()

    assert cfg.grace_minutes == 10
    assert cfg.standard_start_time == time(8, 0)


def test_builder_chaining_and_bool_parsing():
    cfg = TimeRuleConfigBuilder().set("apply_lunch_on_friday", "yes").set("early_arrival_flag_minutes", "15").build()

    assert cfg.apply_lunch_on_friday is True
    assert cfg.early_arrival_flag_minutes == 15


def test_unknown_setting_is_rejected():
    with pytest.raises(ConfigurationError):
        build_config({"lunch_minutes": 30})


def test_inverted_window_is_rejected():
    with pytest.raises(ConfigurationError):
        build_config({"clock2_window_start": "12:10", "clock2_window_end": "12:00"})


def test_bad_time_format_is_rejected():
    with pytest.raises(ConfigurationError):
        build_config({"clock1_max_time": "half eleven"})


def test_negative_minutes_are_rejected():
    with pytest.raises(ConfigurationError):
        build_config({"long_bathroom_threshold_minutes": -1})


def test_boolean_is_not_a_minute_value():
    with pytest.raises(ConfigurationError):
        build_config({"grace_minutes": True})


def test_config_is_immutable():
    cfg = build_config()

    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.grace_minutes = 99


def test_as_dict_round_trips_through_builder():
    cfg = build_config({"grace_minutes": 7})

    assert build_config(cfg.as_dict()) == cfg


def test_time_rules_from_env_picks_prefixed_variables():
    env = {"TIME_RULE_GRACE_MINUTES": "10", "TIME_RULE_FRIDAY_END_TIME": "13:30", "OTHER": "x", "TIME_RULE_EMPTY": ""}

    assert time_rules_from_env(env) == {"grace_minutes": "10", "friday_end_time": "13:30"}
