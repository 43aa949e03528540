import json
import uuid

import pytest

from pixorder_app.core.errors import RuleFileError
from pixorder_app.core.ratio import AspectRatio
from pixorder_app.core.rules import Rule, RuleSet, default_rules


def test_default_rule_order():
    rules = RuleSet.default()
    assert [r.destination_path for r in rules] == [
        "Square",
        "Landscape_16-9",
        "Landscape_4-3",
        "Portrait_9-16",
        "Portrait_3-4",
    ]
    assert all(r.is_enabled for r in rules)


@pytest.mark.parametrize(
    "ratio,folder",
    [
        (1.0, "Square"),
        (1.78, "Landscape_16-9"),
        (1.33, "Landscape_4-3"),
        (0.5625, "Portrait_9-16"),
        (0.75, "Portrait_3-4"),
    ],
)
def test_default_rules_match(ratio, folder):
    rule = RuleSet.default().find_matching_rule(AspectRatio(ratio))
    assert rule is not None
    assert rule.destination_path == folder


def test_no_match_returns_none():
    assert RuleSet.default().find_matching_rule(AspectRatio(3.0)) is None
    assert RuleSet().find_matching_rule(AspectRatio(1.0)) is None


def test_earlier_rule_wins_overlap():
    first = Rule(name="Wide A", target_ratio=AspectRatio(1.5, 0.2), destination_path="A")
    second = Rule(name="Wide B", target_ratio=AspectRatio(1.6, 0.2), destination_path="B")
    query = AspectRatio(1.55)

    assert RuleSet([first, second]).find_matching_rule(query) is first
    assert RuleSet([second, first]).find_matching_rule(query) is second


def test_disabled_rule_never_matches():
    disabled = Rule(
        name="Square",
        target_ratio=AspectRatio(1.0),
        destination_path="Square",
        is_enabled=False,
    )
    fallback = Rule(
        name="Loose square",
        target_ratio=AspectRatio(1.0, 0.2),
        destination_path="Squarish",
    )

    assert not disabled.matches(AspectRatio(1.0))
    assert RuleSet([disabled, fallback]).find_matching_rule(AspectRatio(1.0)) is fallback


def test_query_tolerance_combines_with_rule_tolerance():
    rule = Rule(name="Exact", target_ratio=AspectRatio(2.0, 0.0), destination_path="Two")
    assert RuleSet([rule]).find_matching_rule(AspectRatio(2.04, 0.05)) is rule
    assert RuleSet([rule]).find_matching_rule(AspectRatio(2.04, 0.0)) is None


@pytest.mark.parametrize("folder", ["", "   ", "a/b", "..", ".", "a\\b"])
def test_invalid_destination_rejected(folder):
    with pytest.raises(ValueError):
        Rule(name="Bad", target_ratio=AspectRatio(1.0), destination_path=folder)


def test_save_and_load_preserve_order(tmp_path):
    path = tmp_path / "rules.json"
    original = RuleSet(default_rules())
    original.save(path)

    loaded = RuleSet.load(path)
    assert [r.id for r in loaded] == [r.id for r in original]
    assert [r.destination_path for r in loaded] == [r.destination_path for r in original]
    assert loaded.rules[1].target_ratio.ratio == pytest.approx(16 / 9)


def test_load_uses_json_keys_and_default_tolerance(tmp_path):
    rule_id = uuid.uuid4()
    path = tmp_path / "rules.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": str(rule_id),
                    "name": "Panorama",
                    "destinationPath": "Panorama",
                    "isEnabled": True,
                    "targetRatio": 3.0,
                }
            ]
        ),
        encoding="utf-8",
    )

    rule = RuleSet.load(path).rules[0]
    assert rule.id == rule_id
    assert rule.target_ratio == AspectRatio(3.0, 0.05)


def test_load_missing_file(tmp_path):
    with pytest.raises(RuleFileError):
        RuleSet.load(tmp_path / "missing.json")


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        '{"id": "x"}',
        '[{"name": "no id"}]',
        '[{"id": "not-a-uuid", "name": "x", "destinationPath": "X", '
        '"isEnabled": true, "targetRatio": 1.0}]',
        '[{"id": "%s", "name": "x", "destinationPath": "", '
        '"isEnabled": true, "targetRatio": 1.0}]' % uuid.uuid4(),
    ],
)
def test_load_malformed_file(tmp_path, content):
    path = tmp_path / "rules.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(RuleFileError):
        RuleSet.load(path)
