"""Tests for the declarative keyword rule matcher."""

from components.base import KeywordPattern, Rule, all_matches, first_match, keywords_present, normalize_text


def test_keyword_pattern_requires_every_group():
    pattern = KeywordPattern(["valve"], ["replace", "different manufacturer"])

    assert pattern.matches("Replace the leaking VALVE")
    assert pattern.matches("valve from a different manufacturer")
    assert not pattern.matches("replace the pump seal")
    assert not pattern.matches("")
    assert not pattern.matches(None)


def test_either_pattern_matches_any_member():
    pattern = KeywordPattern(["alarm"], ["setpoint"]) | KeywordPattern.any_of("software configuration")

    assert pattern.matches("raise the alarm setpoint")
    assert pattern.matches("Software configuration update")
    assert not pattern.matches("alarm panel relocation")


def test_first_match_respects_table_order():
    rules = (
        Rule(KeywordPattern.any_of("replace"), "replacement", name="replacement"),
        Rule(KeywordPattern.any_of("new"), "new", name="new"),
    )

    assert first_match(rules, "replace with new unit") == "replacement"
    assert first_match(rules, "brand new unit") == "new"
    assert first_match(rules, "inspect", default="none") == "none"


def test_all_matches_is_additive():
    rules = (
        Rule(KeywordPattern.any_of("pump"), 1, name="pump"),
        Rule(KeywordPattern.any_of("seal"), 2, name="seal"),
        Rule(KeywordPattern.any_of("valve"), 3, name="valve"),
    )

    matched = all_matches(rules, "pump seal leak")
    assert [rule.name for rule in matched] == ["pump", "seal"]


def test_text_helpers():
    assert normalize_text("Replace VALVE", None, "", "Now") == "replace valve now"
    assert keywords_present("Seismic CONTAINMENT work", ["containment", "pump", "seismic"]) == [
        "containment",
        "seismic",
    ]
