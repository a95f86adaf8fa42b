"""Language hints that adjust the primary detection confidence.

A hint names a language (``"german"``, ``"pl"``, ...).  When the primary
encoding of a detection belongs to the set of encodings typically used for
that language, its confidence is multiplied by the group's boost and capped
at 1.0.  The encoding itself and the ranked candidate list are never
changed, so after a boost the primary confidence may differ from the first
candidate's confidence.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable

from codeshift.enums import Encoding
from codeshift.pipeline import DetectionResult

Membership = Callable[[Encoding], bool]


@dataclasses.dataclass(frozen=True, slots=True)
class HintGroup:
    """A family of language hints sharing one allow-set and boost factor."""

    languages: frozenset[str]
    accepts: Membership
    boost: float


def _one_of(*encodings: Encoding) -> Membership:
    allowed = frozenset(encodings)
    return allowed.__contains__


HINT_GROUPS: tuple[HintGroup, ...] = (
    HintGroup(
        languages=frozenset({"en", "english"}),
        accepts=lambda encoding: encoding.is_ascii_compatible,
        boost=1.2,
    ),
    # Western European
    HintGroup(
        languages=frozenset({"de", "german", "fr", "french", "es", "spanish"}),
        accepts=_one_of(
            Encoding.ISO_8859_1, Encoding.ISO_8859_15, Encoding.WINDOWS_1252
        ),
        boost=1.3,
    ),
    # Central European
    HintGroup(
        languages=frozenset({"pl", "polish", "cz", "czech", "hu", "hungarian"}),
        accepts=_one_of(Encoding.WINDOWS_1250, Encoding.ISO_8859_2),
        boost=1.3,
    ),
    HintGroup(
        languages=frozenset({"ru", "russian", "cyrillic"}),
        accepts=_one_of(Encoding.WINDOWS_1251, Encoding.ISO_8859_5),
        boost=1.3,
    ),
)


def find_hint_group(hint: str) -> HintGroup | None:
    """Return the group *hint* belongs to, or ``None`` if it is unrecognized."""
    key = hint.strip().lower()
    for group in HINT_GROUPS:
        if key in group.languages:
            return group
    return None


def apply_language_hint(result: DetectionResult, hint: str) -> DetectionResult:
    """Return *result* with its primary confidence boosted for *hint*.

    Unrecognized hints and encodings outside the hint's allow-set return
    *result* unchanged.

    :param result: A detection result to adjust.
    :param hint: A language code or name, case-insensitive.
    :returns: A new :class:`DetectionResult`, or *result* itself.
    """
    group = find_hint_group(hint)
    if group is None or not group.accepts(result.encoding):
        return result
    boosted = min(1.0, result.confidence * group.boost)
    return dataclasses.replace(result, confidence=boosted)
