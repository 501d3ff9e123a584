# eaf_engine/schema/taxonomy.py
"""
Declarative description of the EAF 3.0 element taxonomy.

One :class:`ElementRule` per tag, following the EAF 3.0 XSD and the
"EAF Annotation Format 3.0 and ELAN" guide (section numbers in comments).
Numeric and URL attributes are kept as free-form strings.
File: eaf_engine/schema/taxonomy.py
"""
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Callable, Dict, FrozenSet, List, Mapping, Optional, Tuple

from ..core.interfaces import Tag, TEXT


class Multiplicity(Enum):
    """How many consecutive children a child rule consumes."""
    EXACTLY_ONE = "exactly-one"
    OPTIONAL = "optional"
    ZERO_OR_MORE = "zero-or-more"
    ONE_OR_MORE = "one-or-more"


@dataclass(frozen=True)
class ChildRule:
    """
    A slot in an element's child sequence, matching any of ``tags``.

    ``section`` marks the document sections that may be left out of a
    license-only stub unless the validator requires them.
    """
    tags: Tuple[str, ...]
    multiplicity: Multiplicity
    section: bool = False

    def matches(self, tag: str) -> bool:
        return tag in self.tags

    def describe(self) -> str:
        return "|".join(self.tags)


# Checks run on the whole attribute map; each returns a (rule, message) pair
# when it fails
AttrsCheck = Callable[[Mapping[str, str]], Optional[Tuple[str, str]]]


@dataclass(frozen=True)
class ElementRule:
    """Attribute and content rules for one tag."""
    tag: str
    required: FrozenSet[str] = frozenset()
    optional: FrozenSet[str] = frozenset()
    values: Mapping[str, "ValueCheck"] = field(default_factory=dict)
    content: Tuple[ChildRule, ...] = ()
    checks: Tuple[AttrsCheck, ...] = ()

    @property
    def known_attributes(self) -> FrozenSet[str]:
        return self.required | self.optional


@dataclass(frozen=True)
class ValueCheck:
    """Predicate on a single attribute value."""
    description: str
    test: Callable[[str], bool]

    def __call__(self, value: str) -> bool:
        return self.test(value)


def one_of(*choices: str) -> ValueCheck:
    allowed = frozenset(choices)
    return ValueCheck(f"one of {sorted(allowed)}", lambda v: v in allowed)


_FRACTION = re.compile(r"(\.\d+)")
_ZULU = re.compile(r"Z$")


def parse_timestamp(value: str) -> Optional[datetime]:
    """
    Parse an xs:dateTime / xs:date style timestamp, or return None.

    Accepts fractional seconds of any precision and a trailing ``Z``.
    """
    text = _ZULU.sub("+00:00", value.strip())
    match = _FRACTION.search(text)
    if match:
        digits = match.group(1)[1:]
        text = text.replace(match.group(1), "." + (digits + "000000")[:6], 1)
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    try:
        parsed = date.fromisoformat(text)
    except ValueError:
        return None
    return datetime(parsed.year, parsed.month, parsed.day)


TIMESTAMP = ValueCheck("a timestamp", lambda v: parse_timestamp(v) is not None)
BOOLEAN = one_of("true", "false")
TIME_UNITS = one_of("milliseconds", "PAL-frames", "NTSC-frames")
STEREOTYPES = ("Time_Subdivision", "Symbolic_Subdivision", "Symbolic_Association", "Included_In")
STEREOTYPE = one_of(*STEREOTYPES)
DIRECTIONALITY = one_of("undirected", "unidirectional", "bidirectional")
EXTERNAL_REF_TYPE = one_of("iso12620", "ecv", "cve_id", "lexen_id", "resource_url")


def _one(*tags) -> ChildRule:
    return ChildRule(tuple(str(t) for t in tags), Multiplicity.EXACTLY_ONE)


def _maybe(*tags) -> ChildRule:
    return ChildRule(tuple(str(t) for t in tags), Multiplicity.OPTIONAL)


def _many(*tags) -> ChildRule:
    return ChildRule(tuple(str(t) for t in tags), Multiplicity.ZERO_OR_MORE)


def _some(*tags) -> ChildRule:
    return ChildRule(tuple(str(t) for t in tags), Multiplicity.ONE_OR_MORE)


def format_matches_version(attrs: Mapping[str, str]) -> Optional[Tuple[str, str]]:
    """If FORMAT is present it must equal VERSION exactly."""
    if "format" in attrs and attrs["format"] != attrs.get("version"):
        return (
            "format-version-mismatch",
            f"format {attrs['format']!r} does not equal version {attrs.get('version')!r}",
        )
    return None


def _rule(tag: Tag, required=(), optional=(), values=None, content=(), checks=()) -> ElementRule:
    return ElementRule(
        tag=tag.value,
        required=frozenset(required),
        optional=frozenset(optional),
        values=dict(values or {}),
        content=tuple(content),
        checks=tuple(checks),
    )


_RULES: List[ElementRule] = [
    # 2.1 annotation document; the XSD child order differs from the guide's
    # section order
    _rule(
        Tag.ANNOTATION_DOCUMENT,
        required=("author", "date", "version"),
        optional=("format",),
        values={"date": TIMESTAMP},
        content=(
            _many(Tag.LICENSE),
            ChildRule((Tag.HEADER.value,), Multiplicity.EXACTLY_ONE, section=True),
            ChildRule((Tag.TIME_ORDER.value,), Multiplicity.EXACTLY_ONE, section=True),
            _many(Tag.TIER),
            _many(Tag.LINGUISTIC_TYPE),
            _many(Tag.LOCALE),
            _many(Tag.LANGUAGE),
            _many(Tag.CONSTRAINT),
            _many(Tag.CONTROLLED_VOCABULARY),
            _many(Tag.LEXICON_REF),
            _many(Tag.REF_LINK_SET),
            _many(Tag.EXTERNAL_REF),
        ),
        checks=(format_matches_version,),
    ),
    # 2.2 license
    _rule(Tag.LICENSE, optional=("license-url",), content=(_one(TEXT),)),
    # 2.3 header
    _rule(
        Tag.HEADER,
        optional=("media-file", "time-units"),
        values={"time-units": TIME_UNITS},
        content=(
            _many(Tag.MEDIA_DESCRIPTOR),
            _many(Tag.LINKED_FILE_DESCRIPTOR),
            _many(Tag.PROPERTY),
        ),
    ),
    # 2.3.1 media descriptor
    _rule(
        Tag.MEDIA_DESCRIPTOR,
        required=("media-url", "mime-type"),
        optional=("relative-media-url", "time-origin", "extracted-from"),
    ),
    # 2.3.2 linked file descriptor
    _rule(
        Tag.LINKED_FILE_DESCRIPTOR,
        required=("link-url", "mime-type"),
        optional=("relative-link-url", "time-origin", "associated-with"),
    ),
    # 2.3.3 property
    _rule(Tag.PROPERTY, optional=("name",), content=(_one(TEXT),)),
    # 2.4 time order
    _rule(Tag.TIME_ORDER, content=(_many(Tag.TIME_SLOT),)),
    # 2.4.1 time slot
    _rule(Tag.TIME_SLOT, required=("time-slot-id",), optional=("time-value",)),
    # 2.5 tier
    _rule(
        Tag.TIER,
        required=("tier-id", "linguistic-type-ref"),
        optional=(
            "participant", "annotator", "default-locale",
            "parent-ref", "ext-ref", "lang-ref",
        ),
        content=(_many(Tag.ANNOTATION),),
    ),
    # 2.5.1 annotation
    _rule(Tag.ANNOTATION, content=(_one(Tag.ALIGNABLE_ANNOTATION, Tag.REF_ANNOTATION),)),
    # 2.5.2 alignable annotation
    _rule(
        Tag.ALIGNABLE_ANNOTATION,
        required=("annotation-id", "time-slot-ref1", "time-slot-ref2"),
        optional=("svg-ref", "ext-ref", "lang-ref", "cve-ref"),
        content=(_one(Tag.ANNOTATION_VALUE),),
    ),
    # 2.5.3 ref annotation
    _rule(
        Tag.REF_ANNOTATION,
        required=("annotation-id", "annotation-ref"),
        optional=("previous-annotation", "ext-ref", "lang-ref", "cve-ref"),
        content=(_one(Tag.ANNOTATION_VALUE),),
    ),
    # 2.5.4 annotation value; ELAN writes empty values for blank annotations
    _rule(Tag.ANNOTATION_VALUE, content=(_maybe(TEXT),)),
    # 2.6 linguistic type
    _rule(
        Tag.LINGUISTIC_TYPE,
        required=("linguistic-type-id",),
        optional=(
            "time-alignable", "constraints", "graphic-references",
            "controlled-vocabulary-ref", "ext-ref", "lexicon-ref",
        ),
        values={"time-alignable": BOOLEAN, "graphic-references": BOOLEAN},
    ),
    # 2.7 constraint
    _rule(
        Tag.CONSTRAINT,
        required=("stereotype",),
        optional=("description",),
        values={"stereotype": STEREOTYPE},
    ),
    # 2.9 controlled vocabulary
    _rule(
        Tag.CONTROLLED_VOCABULARY,
        required=("cv-id",),
        optional=("ext-ref",),
        content=(_many(Tag.CV_DESCRIPTION), _many(Tag.CV_ENTRY_ML)),
    ),
    # 2.9.1 cv entry ml
    _rule(
        Tag.CV_ENTRY_ML,
        required=("cve-id",),
        optional=("ext-ref",),
        content=(_some(Tag.CVE_VALUE),),
    ),
    # 2.9.2 cve value
    _rule(
        Tag.CVE_VALUE,
        required=("lang-ref",),
        optional=("description",),
        content=(_one(TEXT),),
    ),
    # 2.9.3 description (DESCRIPTION on the wire)
    _rule(Tag.CV_DESCRIPTION, required=("lang-ref",), content=(_one(TEXT),)),
    # 2.10 external ref
    _rule(
        Tag.EXTERNAL_REF,
        required=("ext-ref-id", "type", "value"),
        values={"type": EXTERNAL_REF_TYPE},
    ),
    # 2.11 locale
    _rule(Tag.LOCALE, required=("language-code",), optional=("country-code", "variant")),
    # 2.12 language
    _rule(Tag.LANGUAGE, required=("lang-id",), optional=("lang-def", "lang-label")),
    # 2.13 lexicon ref
    _rule(
        Tag.LEXICON_REF,
        required=("lex-ref-id", "name", "type", "url", "lexicon-id", "lexicon-name"),
        optional=("datcat-id", "datcat-name"),
    ),
    # 2.14 ref link set
    _rule(
        Tag.REF_LINK_SET,
        required=("link-set-id",),
        optional=("link-set-name", "ext-ref", "lang-ref", "cv-ref"),
        content=(_many(Tag.CROSS_REF_LINK, Tag.GROUP_REF_LINK),),
    ),
    # 2.14.1 cross ref link
    _rule(
        Tag.CROSS_REF_LINK,
        required=("ref1", "ref2", "ref-link-id"),
        optional=(
            "directionality", "ref-link-name", "ext-ref",
            "lang-ref", "cve-ref", "ref-type",
        ),
        values={"directionality": DIRECTIONALITY},
    ),
    # 2.14.2 group ref link
    _rule(
        Tag.GROUP_REF_LINK,
        required=("refs", "ref-link-id"),
        optional=("ref-link-name", "ext-ref", "lang-ref", "cve-ref", "ref-type"),
    ),
]

SCHEMA: Dict[str, ElementRule] = {rule.tag: rule for rule in _RULES}
