from backend.core.models import BroadcastRecord, DatafeedSnapshot
from backend.data.atis import parse_letter_from_text, resolve, resolve_letter

from helpers import atis, snapshot


def test_single_match_uses_structured_letter():
    feed = snapshot(atis("KXYZ_ATIS", "B", ["ATIS INFO B 1200Z"]))
    result = resolve("KXYZ", feed)
    assert result.letter == "B"
    assert result.texts == ["ATIS INFO B 1200Z"]


def test_text_one_letter_ahead_overrides_structured_letter():
    record = atis("KXYZ_ATIS", "B", ["KXYZ ATIS INFO C 1251Z"])
    assert resolve_letter(record) == "C"


def test_text_two_letters_ahead_keeps_structured_letter():
    record = atis("KXYZ_ATIS", "B", ["KXYZ ATIS INFO D 1251Z"])
    assert resolve_letter(record) == "B"


def test_text_behind_keeps_structured_letter():
    record = atis("KXYZ_ATIS", "C", ["KXYZ ATIS INFO B 1251Z"])
    assert resolve_letter(record) == "C"


def test_z_to_a_rollover_is_not_treated_as_advance():
    record = atis("KXYZ_ATIS", "Z", ["KXYZ ATIS INFO A 1251Z"])
    assert resolve_letter(record) == "Z"


def test_only_structured_letter():
    assert resolve_letter(atis("KXYZ_ATIS", "F")) == "F"


def test_only_text_letter():
    record = atis("KXYZ_ATIS", None, ["THIS IS KXYZ INFORMATION K"])
    assert resolve_letter(record) == "K"


def test_neither_letter_source():
    assert resolve_letter(atis("KXYZ_ATIS")) == "-"
    assert resolve_letter(atis("KXYZ_ATIS", None, ["RWY 28L IN USE"])) == "-"


def test_text_is_joined_across_lines_before_scanning():
    record = atis("KXYZ_ATIS", None, ["KXYZ ATIS INFO", "G 1853Z"])
    assert resolve_letter(record) == "G"


def test_info_pattern_takes_precedence_over_information():
    assert parse_letter_from_text(["INFORMATION Q ... ADVISE YOU HAVE INFO R"]) == "R"


def test_letter_pattern_is_case_sensitive():
    assert parse_letter_from_text(["kxyz atis info c"]) is None
    assert parse_letter_from_text(["INFO c"]) is None


def test_zero_matches():
    feed = snapshot(atis("KABC_ATIS", "A", ["INFO A"]))
    result = resolve("KXYZ", feed)
    assert result.letter == "-"
    assert result.texts == []


def test_prefix_match_is_case_sensitive():
    feed = snapshot(atis("KXYZ_ATIS", "A"))
    assert resolve("kxyz", feed).letter == "-"


def test_arrival_departure_split():
    feed = snapshot(
        atis("KXYZ_A_ATIS", "A", ["KXYZ ARR INFO A"]),
        atis("KXYZ_D_ATIS", "C", ["KXYZ DEP INFO C"]),
    )
    result = resolve("KXYZ", feed)
    assert result.letter == "A/C"
    assert result.texts == ["KXYZ ARR INFO A", "KXYZ DEP INFO C"]


def test_split_applies_one_ahead_rule_per_stream():
    feed = snapshot(
        atis("KXYZ_D_ATIS", "C", ["KXYZ DEP INFO D"]),
        atis("KXYZ_A_ATIS", "A", ["KXYZ ARR INFO A"]),
    )
    assert resolve("KXYZ", feed).letter == "A/D"


def test_split_with_missing_departure_stream():
    feed = snapshot(
        atis("KXYZ_A_ATIS", "A", ["KXYZ ARR INFO A"]),
        atis("KXYZ_ATIS", "B", ["KXYZ INFO B"]),
    )
    result = resolve("KXYZ", feed)
    assert result.letter == "A/-"
    # Every matching record contributes text, not only arrival/departure
    assert result.texts == ["KXYZ ARR INFO A", "KXYZ INFO B"]


def test_split_uses_first_matching_stream():
    feed = snapshot(
        atis("KXYZ_A_ATIS", "A"),
        atis("KXYZ_A_ATIS", "M"),
        atis("KXYZ_D_ATIS", "P"),
    )
    assert resolve("KXYZ", feed).letter == "A/P"


def test_several_unmarked_matches():
    feed = snapshot(atis("KXYZ_ATIS", "B", ["INFO B"]), atis("KXYZ_1_ATIS", "C"))
    result = resolve("KXYZ", feed)
    assert result.letter == "-/-"
    assert result.texts == ["INFO B"]


def test_records_without_text_are_left_out_of_texts():
    feed = snapshot(
        atis("KXYZ_A_ATIS", "A"),
        atis("KXYZ_D_ATIS", "C", ["DEP INFO C"]),
    )
    assert resolve("KXYZ", feed).texts == ["DEP INFO C"]


def test_records_parsed_from_feed():
    feed = DatafeedSnapshot.from_feed({
        'general': {'update_timestamp': '2024-05-01T12:00:00Z'},
        'atis': [
            {'callsign': 'KSFO_ATIS', 'atis_code': 'B', 'text_atis': ['SFO INFO', 'B']},
            {'callsign': 'KOAK_ATIS', 'atis_code': '', 'text_atis': None},
        ],
    })
    assert feed.update_timestamp == '2024-05-01T12:00:00Z'
    assert feed.atis[0] == BroadcastRecord('KSFO_ATIS', 'B', ['SFO INFO', 'B'])
    assert feed.atis[1].structured_letter is None
    assert resolve("KOAK", feed).letter == "-"


def test_null_text_lines_are_dropped():
    feed = DatafeedSnapshot.from_feed({
        'atis': [{'callsign': 'KSFO_ATIS', 'atis_code': 'B', 'text_atis': ['SFO INFO B', None, 'RWY 28L']}],
    })
    assert feed.atis[0].broadcast_text == ['SFO INFO B', 'RWY 28L']
    assert resolve("KSFO", feed).texts == ['SFO INFO B RWY 28L']
