"""Tests for the tolerant structured-output parser."""

from __future__ import annotations

import json

from raceready.extraction.models import AthleteEntry, EventRecord
from raceready.extraction.parser import (
    parse_events_response,
    parse_highlight_response,
    repair_trailing_commas,
    scan_array_objects,
    strip_code_fences,
)


_EVENTS = [
    {
        "eventNumber": 1,
        "eventName": "Girls 9-10 50 Yard Freestyle",
        "athletes": [
            {"name": "Smith, Jane", "team": "DOL", "heat": 1, "lane": 4, "seedTime": "35.12"},
            {"name": "Lee, Sam", "team": "SHK", "heat": 1, "lane": 5, "seedTime": "NT"},
        ],
        "rawText": "Event 1 Girls 9-10 50 Yard Freestyle",
    },
    {
        "eventNumber": 2,
        "eventName": "Boys {9-10} [Open] 100 \"IM\"",
        "athletes": [{"name": "Chen, Mike", "team": "DOL", "heat": 2, "lane": 3}],
        "rawText": "Event 2 \\ braces } inside ] strings",
    },
    {
        "eventNumber": 3,
        "eventName": "Mixed 200 Medley Relay",
        "athletes": [],
        "rawText": "",
    },
]


def _payload() -> str:
    return json.dumps({"events": _EVENTS})


# ---------------------------------------------------------------------------
# Direct parse
# ---------------------------------------------------------------------------

def test_parses_valid_payload_into_event_records() -> None:
    events = parse_events_response(_payload())

    assert [event.event_number for event in events] == [1, 2, 3]
    assert events[0].athletes[0] == AthleteEntry(
        name="Smith, Jane", team="DOL", heat=1, lane=4, seed_time="35.12"
    )
    assert events[1].event_name == 'Boys {9-10} [Open] 100 "IM"'
    assert events[2].athletes == ()


def test_code_fences_do_not_change_the_result() -> None:
    plain = parse_events_response(_payload())

    assert parse_events_response(f"```json\n{_payload()}\n```") == plain
    assert parse_events_response(f"```\n{_payload()}\n```") == plain
    assert parse_events_response(f"  \n```json{_payload()}```  ") == plain


def test_trailing_commas_are_repaired() -> None:
    text = '{"events": [{"eventNumber": 4, "eventName": "Girls 50 Back", "athletes": [{"name": "Ann Roe",},],},],}'

    events = parse_events_response(text)

    assert events == [EventRecord(event_number=4, event_name="Girls 50 Back", athletes=(AthleteEntry(name="Ann Roe"),))]


def test_garbage_yields_empty_list() -> None:
    assert parse_events_response("") == []
    assert parse_events_response("I could not read this document.") == []
    assert parse_events_response('{"meet": "Regional"}') == []
    assert parse_events_response('{"events": [') == []


# ---------------------------------------------------------------------------
# Recovery scan
# ---------------------------------------------------------------------------

def test_truncation_recovers_exactly_the_complete_events() -> None:
    text = _payload()
    expected = parse_events_response(text)

    # Index of the closing brace of each top-level event object.
    closes: list[int] = []
    for k in range(1, len(_EVENTS) + 1):
        prefix = json.dumps({"events": _EVENTS[:k]})
        closes.append(len(prefix) - 3)
    assert all(text[close] == "}" for close in closes)

    for cut in range(len(text)):
        complete = sum(1 for close in closes if close < cut)
        recovered = parse_events_response(text[:cut])
        assert recovered == expected[:complete], f"cut at {cut}"


def test_truncated_object_is_dropped_not_completed() -> None:
    text = '{"events": [{"eventNumber": 1, "eventName": "A", "athletes": []}, {"eventNumber": 2, "eventName": "B", "athl'

    events = parse_events_response(text)

    assert [event.event_name for event in events] == ["A"]


def test_malformed_element_is_skipped_during_recovery() -> None:
    text = (
        '{"events": [{"eventNumber": 1, "eventName": "A"}, '
        '{"eventNumber": 2, "eventName": B}, '
        '{"eventNumber": 3, "eventName": "C"}, {"eventNumber": 4'
    )

    events = parse_events_response(text)

    assert [event.event_number for event in events] == [1, 3]


def test_scanner_treats_brackets_inside_strings_as_text() -> None:
    text = '{"events": [{"eventName": "a ] b", "rawText": "} { \\" ]"}, {"eventName": "c"}'

    objects = scan_array_objects(text, "events")

    assert [item["eventName"] for item in objects] == ["a ] b", "c"]


def test_scanner_stops_at_array_end() -> None:
    text = '{"events": [{"eventName": "a"}], "other": [{"eventName": "b"}]'

    assert [item["eventName"] for item in scan_array_objects(text, "events")] == ["a"]


def test_scanner_without_key_returns_nothing() -> None:
    assert scan_array_objects('{"rows": [{"a": 1}]}', "events") == []


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

def test_event_without_name_is_discarded() -> None:
    text = json.dumps(
        {
            "events": [
                {"eventNumber": 1, "eventName": "", "athletes": []},
                {"eventNumber": 2, "athletes": []},
                {"eventNumber": 3, "eventName": 42},
                {"eventNumber": 4, "eventName": "Kept"},
            ]
        }
    )

    assert [event.event_number for event in parse_events_response(text)] == [4]


def test_event_number_kept_only_when_numeric() -> None:
    text = json.dumps(
        {
            "events": [
                {"eventNumber": "7", "eventName": "String number"},
                {"eventNumber": True, "eventName": "Bool number"},
                {"eventNumber": 8.0, "eventName": "Integral float"},
                {"eventNumber": None, "eventName": "Null number"},
            ]
        }
    )

    numbers = {event.event_name: event.event_number for event in parse_events_response(text)}

    assert numbers == {
        "String number": None,
        "Bool number": None,
        "Integral float": 8,
        "Null number": None,
    }


def test_athlete_fields_are_filtered_not_coerced() -> None:
    text = json.dumps(
        {
            "events": [
                {
                    "eventNumber": 5,
                    "eventName": "Boys 50 Fly",
                    "athletes": [
                        {"name": "Valid Person", "team": 12, "heat": "2", "lane": 3.0, "seedTime": 31.2},
                        {"name": "", "team": "DOL"},
                        {"team": "DOL", "lane": 4},
                        "Not an object",
                        {"name": "Zero Lane", "lane": 0, "heat": -1},
                    ],
                }
            ]
        }
    )

    (event,) = parse_events_response(text)

    assert event.athletes == (
        AthleteEntry(name="Valid Person"),
        AthleteEntry(name="Zero Lane"),
    )


def test_duplicate_athletes_inside_event_are_kept() -> None:
    text = json.dumps(
        {"events": [{"eventName": "Relay", "athletes": [{"name": "Ann Roe"}, {"name": "Ann Roe"}]}]}
    )

    (event,) = parse_events_response(text)

    assert len(event.athletes) == 2


# ---------------------------------------------------------------------------
# Helpers and highlight payloads
# ---------------------------------------------------------------------------

def test_strip_code_fences_only_removes_literal_fences() -> None:
    assert strip_code_fences("```json\n{}\n```") == "{}"
    assert strip_code_fences("~~~\n{}\n~~~") == "~~~\n{}\n~~~"


def test_repair_trailing_commas() -> None:
    assert repair_trailing_commas('{"a": [1, 2, ], }') == '{"a": [1, 2]}'


def test_parse_highlight_response_normalizes_targets() -> None:
    text = (
        "```json\n"
        '{"highlights": ['
        '{"name": "Jane Smith", "event": "Girls 50 Free", "page": 2, "yPercent": 45.5, '
        '"xStartPercent": 5, "xEndPercent": 95, "found": true},'
        '{"name": "Sam Lee", "event": "Boys 50 Free", "page": 1, "yPercent": 10, "found": false},'
        '{"name": "No Page", "yPercent": 10, "found": true},'
        '{"name": "Cut", "page": 3, "yPer'
    )

    targets = parse_highlight_response(text)

    assert len(targets) == 2
    first, second = targets
    assert first.page == 2
    assert first.y_percent == 45.5
    assert first.x_start_percent == 5.0
    assert first.found is True
    assert second.x_start_percent is None
    assert second.found is False


def test_oversized_integer_literal_does_not_escape_the_parser() -> None:
    text = (
        '{"events": [{"eventName": "A", "eventNumber": '
        + "1" * 5000
        + '}, {"eventName": "B", "eventNumber": 2}]}'
    )

    events = parse_events_response(text)

    assert events[-1].event_name == "B"
    assert events[-1].event_number == 2


def test_deeply_nested_payload_falls_back_to_scanning() -> None:
    text = '{"events": [{"eventName": "A", "eventNumber": 1}], "x": ' + "[" * 100_000 + "]" * 100_000 + "}"

    events = parse_events_response(text)

    assert [event.event_name for event in events] == ["A"]


def test_non_finite_highlight_numbers_are_rejected() -> None:
    text = (
        '{"highlights": ['
        '{"name": "A", "page": 1, "yPercent": NaN, "found": true},'
        '{"name": "B", "page": 1, "yPercent": Infinity, "found": true},'
        '{"name": "C", "page": 1, "yPercent": 20, "xStartPercent": -Infinity, "found": true}'
        "]}"
    )

    (target,) = parse_highlight_response(text)

    assert target.athlete_name == "C"
    assert target.x_start_percent is None
