import pytest

from solind.constants import PROGRAM_DATA, PROGRAM_LOG
from solind.extraction.classify import LineKinds, classify_line, classify_system_line

TARGET = "T1"


@pytest.mark.parametrize(
    "line, expected",
    [
        ("Program T1 invoke [2]", LineKinds.EnterTarget()),
        ("Program T2 invoke [2]", LineKinds.EnterOther()),
        ("Program T1 consumed 100 of 200 compute units", LineKinds.Complete()),
        ("Program T2 consumed 100 units", LineKinds.Complete()),
        ("Program T1 success", LineKinds.Noop()),
        ("Program log: invoke me", LineKinds.Noop()),
        ("Program return: T1 AQID", LineKinds.Noop()),
        ("Log truncated", LineKinds.Noop()),
    ],
)
def test_classify_system_line(line, expected):
    assert classify_system_line(line, TARGET) == expected


def test_payload_only_when_target_executes():
    assert classify_line("Program log: hi", current=TARGET, target=TARGET) == LineKinds.Payload("hi")
    assert classify_line("Program log: hi", current="cpi", target=TARGET) == LineKinds.Noop()
    assert classify_line("Program log: hi", current=None, target=TARGET) == LineKinds.Noop()


def test_target_system_lines_fall_through():
    kind = classify_line("Program T1 consumed 1 units", current=TARGET, target=TARGET)
    assert kind == LineKinds.Complete()


def test_payload_prefix_is_configurable():
    line = PROGRAM_DATA + "AAAA"
    assert classify_line(line, current=TARGET, target=TARGET) == LineKinds.Noop()
    kind = classify_line(line, current=TARGET, target=TARGET, payload_prefixes=(PROGRAM_LOG, PROGRAM_DATA))
    assert kind == LineKinds.Payload("AAAA")


def test_prefix_requires_trailing_space():
    assert classify_line("Program log:hi", current=TARGET, target=TARGET) == LineKinds.Noop()
