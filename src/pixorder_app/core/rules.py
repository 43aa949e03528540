# core/rules.py
"""
Classification rules and ordered rule sets.

A Rule maps a target aspect ratio to a destination folder name. A RuleSet
holds rules in configuration order; lookup returns the first enabled rule
whose target matches, so earlier rules win ties.

Rule sets can be persisted as JSON:

    [
      {"id": "...", "name": "Square (1:1)", "destinationPath": "Square",
       "isEnabled": true, "targetRatio": 1.0, "tolerance": 0.05}
    ]
"""

import json
import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from pixorder_app.core.errors import RuleFileError
from pixorder_app.core.ratio import COMMON_RATIOS, DEFAULT_TOLERANCE, AspectRatio

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rule:
    """Named mapping from a target aspect ratio to a destination folder."""

    name: str
    target_ratio: AspectRatio
    destination_path: str
    is_enabled: bool = True
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self):
        folder = self.destination_path
        if not folder or not folder.strip():
            raise ValueError(f"Rule '{self.name}' has an empty destination")
        if "/" in folder or "\\" in folder or folder in (".", ".."):
            raise ValueError(
                f"Rule '{self.name}' destination must be a single folder name, "
                f"got {folder!r}"
            )

    def matches(self, aspect_ratio: AspectRatio) -> bool:
        if not self.is_enabled:
            return False
        return self.target_ratio.matches(aspect_ratio)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "destinationPath": self.destination_path,
            "isEnabled": self.is_enabled,
            "targetRatio": self.target_ratio.ratio,
            "tolerance": self.target_ratio.tolerance,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Rule":
        """
        Build a rule from its JSON representation.

        Raises:
            KeyError, TypeError, ValueError: on missing or malformed fields
        """
        target = AspectRatio(
            ratio=float(data["targetRatio"]),
            tolerance=float(data.get("tolerance", DEFAULT_TOLERANCE)),
        )
        return cls(
            id=uuid.UUID(str(data["id"])),
            name=str(data["name"]),
            target_ratio=target,
            destination_path=str(data["destinationPath"]),
            is_enabled=bool(data["isEnabled"]),
        )


@dataclass
class RuleSet:
    """Ordered collection of rules with first-match lookup."""

    rules: List[Rule] = field(default_factory=list)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def find_matching_rule(self, aspect_ratio: AspectRatio) -> Optional[Rule]:
        for rule in self.rules:
            if rule.matches(aspect_ratio):
                return rule
        return None

    @classmethod
    def default(cls) -> "RuleSet":
        return cls(rules=list(default_rules()))

    @classmethod
    def load(cls, path: Union[str, Path]) -> "RuleSet":
        """
        Load a rule set from a JSON file.

        Args:
            path: Path to a JSON list of rule objects

        Returns:
            RuleSet preserving the file's rule order

        Raises:
            RuleFileError: if the file is missing, unreadable or malformed
        """
        path = Path(path)
        if not path.is_file():
            raise RuleFileError("Rules file not found", path=path)

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise RuleFileError(f"Cannot read rules file ({e})", path=path) from e
        except json.JSONDecodeError as e:
            raise RuleFileError(f"Invalid JSON in rules file ({e})", path=path) from e

        if not isinstance(data, list):
            raise RuleFileError("Rules file must contain a JSON list", path=path)

        rules: List[Rule] = []
        for index, entry in enumerate(data):
            if not isinstance(entry, dict):
                raise RuleFileError(f"Rule #{index} is not an object", path=path)
            try:
                rules.append(Rule.from_dict(entry))
            except (KeyError, TypeError, ValueError) as e:
                raise RuleFileError(f"Invalid rule #{index} ({e})", path=path) from e

        logger.info("Loaded %d rules from %s", len(rules), path)
        return cls(rules=rules)

    def save(self, path: Union[str, Path]) -> None:
        path = Path(path)
        payload = [rule.to_dict() for rule in self.rules]
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as e:
            raise RuleFileError(f"Cannot write rules file ({e})", path=path) from e
        logger.debug("Saved %d rules to %s", len(self.rules), path)


def default_rules() -> List[Rule]:
    """Built-in rule table. Order is significant."""
    return [
        Rule(
            name="Square (1:1)",
            target_ratio=COMMON_RATIOS["square"],
            destination_path="Square",
        ),
        Rule(
            name="Landscape 16:9",
            target_ratio=COMMON_RATIOS["16:9"],
            destination_path="Landscape_16-9",
        ),
        Rule(
            name="Landscape 4:3",
            target_ratio=COMMON_RATIOS["4:3"],
            destination_path="Landscape_4-3",
        ),
        Rule(
            name="Portrait 9:16",
            target_ratio=COMMON_RATIOS["portrait_9:16"],
            destination_path="Portrait_9-16",
        ),
        Rule(
            name="Portrait 3:4",
            target_ratio=COMMON_RATIOS["portrait_4:3"],
            destination_path="Portrait_3-4",
        ),
    ]


__all__ = ["Rule", "RuleSet", "default_rules"]
