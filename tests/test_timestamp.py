import json
from datetime import datetime, timezone

import pytest

from oceanclient.timestamp import Timestamp

EMPTY_TIME_STR = '"0001-01-01T00:00:00Z"'
REFERENCE_TIME_STR = '"2006-01-02T15:04:05Z"'
REFERENCE_UNIX_TIME_STR = "1136214245"
REFERENCE_TIME = datetime(2006, 1, 2, 15, 4, 5, tzinfo=timezone.utc)
UNIX_ORIGIN = datetime(1970, 1, 1, tzinfo=timezone.utc)


@pytest.mark.parametrize("data,want,equal", [
    (Timestamp(REFERENCE_TIME), REFERENCE_TIME_STR, True),
    (Timestamp(), EMPTY_TIME_STR, True),
    (Timestamp(), REFERENCE_TIME_STR, False),
])
def test_marshal(data, want, equal):
    assert (data.to_json() == want) is equal


@pytest.mark.parametrize("data,want,equal", [
    (REFERENCE_TIME_STR, Timestamp(REFERENCE_TIME), True),
    (REFERENCE_UNIX_TIME_STR, Timestamp(REFERENCE_TIME), True),
    (EMPTY_TIME_STR, Timestamp(), True),
    ("0", Timestamp(UNIX_ORIGIN), True),
    (REFERENCE_TIME_STR, Timestamp(), False),
    ("0", Timestamp(), False),
])
def test_unmarshal(data, want, equal):
    assert (Timestamp.from_json(data) == want) is equal


def test_unmarshal_invalid():
    with pytest.raises(ValueError):
        Timestamp.from_json('"asdf"')


@pytest.mark.parametrize("data", [Timestamp(REFERENCE_TIME), Timestamp()])
def test_marshal_reflexivity(data):
    assert Timestamp.from_json(data.to_json()) == data


@pytest.mark.parametrize("data", [Timestamp(REFERENCE_TIME), Timestamp()])
def test_wrapped_reflexivity(data):
    wrapped = json.loads('{"A":0,"Time":%s}' % data.to_json())
    assert Timestamp.from_json(json.dumps(wrapped["Time"])) == data
    assert wrapped["A"] == 0


def test_fractional_seconds_and_offset_are_instants():
    a = Timestamp.from_json('"2002-10-02T15:00:00.05Z"')
    b = Timestamp.from_json('"2002-10-02T16:00:00.05+01:00"')
    assert a == b
    assert a.time == datetime(2002, 10, 2, 15, 0, 0, 50000, tzinfo=timezone.utc)


def test_str():
    assert str(Timestamp(REFERENCE_TIME)) == "2006-01-02 15:04:05 +0000 UTC"