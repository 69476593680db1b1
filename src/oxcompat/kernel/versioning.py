"""Version values and version requirements.

Versions are ``packaging.version.Version`` values (total ordering, string
display). Requirements are expressed the way component authors write them
in manifests: comma-separated clauses using comparison operators, Cargo-style
caret (``^1.2``) and tilde (``~1.2.3``) shorthands, or PEP 440 operators.
Each clause is normalized to PEP 440 specifiers and evaluated with
``packaging.specifiers.SpecifierSet``.

Both types can be used directly as pydantic field types: they validate from
strings and serialize back to strings.
"""

from typing import Annotated, Any, List, Optional, Tuple

from packaging.specifiers import InvalidSpecifier, Specifier, SpecifierSet
from packaging.version import InvalidVersion, Version
from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler, PlainSerializer, PlainValidator, WithJsonSchema
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from .errors import VersionParseError


def parse_version(text: Any) -> Version:
    """Parse a version string (a leading ``v`` is accepted)."""
    if isinstance(text, Version):
        return text
    if not isinstance(text, str):
        raise VersionParseError(repr(text), "expected a version string")
    stripped = text.strip()
    if not stripped:
        raise VersionParseError(text, "empty version")
    try:
        return Version(stripped)
    except InvalidVersion as exc:
        raise VersionParseError(text, str(exc)) from exc


# Placeholder for "no actual version available" (missing dependencies)
SENTINEL_VERSION = Version("0.0.0")


def _make(*release: int) -> Version:
    return Version(".".join(str(part) for part in release))


def next_patch(version: Version) -> Version:
    """1.2.3 -> 1.2.4 (pre-release and local parts dropped)."""
    return _make(version.major, version.minor, version.micro + 1)


def _caret_upper(base: Version) -> Version:
    # Left-most non-zero component may not change:
    # ^1.2.3 -> <2.0.0, ^0.2.3 -> <0.3.0, ^0.0.3 -> <0.0.4
    if base.major != 0:
        return _make(base.major + 1, 0, 0)
    if base.minor != 0:
        return _make(0, base.minor + 1, 0)
    return _make(0, 0, base.micro + 1)


def _tilde_upper(base: Version) -> Version:
    # ~1 -> <2.0.0, ~1.2 / ~1.2.3 -> <1.3.0
    if len(base.release) == 1:
        return _make(base.major + 1, 0, 0)
    return _make(base.major, base.minor + 1, 0)


def _compatible_release_upper(base: Version) -> Version:
    # ~=1.4.5 -> <1.5, ~=2.2 -> <3
    prefix = list(base.release[:-1])
    prefix[-1] += 1
    return _make(*prefix)


# Longest operators first so ">=" is not read as ">"
_PEP440_OPERATORS = (">=", "<=", "==", "!=", "~=", ">", "<")


def _translate_clause(clause: str, source: str) -> Tuple[str, List[str]]:
    """Translate one requirement clause into (display form, PEP 440 specifiers)."""
    if not clause:
        raise VersionParseError(source, "empty requirement clause")

    if clause == "*":
        return "*", []

    if clause.startswith("^"):
        base = parse_version(clause[1:])
        return f"^{base}", [f">={base}", f"<{_caret_upper(base)}"]

    if clause.startswith("~") and not clause.startswith("~="):
        base = parse_version(clause[1:])
        return f"~{base}", [f">={base}", f"<{_tilde_upper(base)}"]

    for operator in _PEP440_OPERATORS:
        if clause.startswith(operator):
            base = parse_version(clause[len(operator):])
            if operator == "~=" and len(base.release) < 2:
                raise VersionParseError(source, f"'{clause}' needs at least major.minor")
            return f"{operator}{base}", [f"{operator}{base}"]

    if clause.startswith("="):
        base = parse_version(clause[1:])
        return f"={base}", [f"=={base}"]

    # Bare version: caret semantics, as in Cargo manifests
    base = parse_version(clause)
    return f"^{base}", [f">={base}", f"<{_caret_upper(base)}"]


class VersionReq:
    """A version requirement such as ``">=0.5.0, <1.0.0"`` or ``"^1.2"``.

    All clauses must hold for a version to match. Two requirements are equal
    when their normalized specifier sets are equal, so ``"^1.0.0"`` equals
    ``">=1.0.0, <2.0.0"``.
    """

    __slots__ = ("_clauses", "_specifiers")

    def __init__(self, clauses: Tuple[str, ...], specifiers: SpecifierSet):
        self._clauses = clauses
        self._specifiers = specifiers

    @classmethod
    def parse(cls, text: str) -> "VersionReq":
        """Parse a comma-separated requirement string."""
        if not isinstance(text, str):
            raise VersionParseError(repr(text), "expected a requirement string")
        stripped = text.strip()
        if not stripped:
            raise VersionParseError(text, "empty requirement")

        clauses: List[str] = []
        specs: List[str] = []
        for part in stripped.split(","):
            display, translated = _translate_clause(part.strip(), text)
            clauses.append(display)
            specs.extend(translated)

        try:
            specifiers = SpecifierSet(",".join(specs))
        except InvalidSpecifier as exc:
            raise VersionParseError(text, str(exc)) from exc
        return cls(tuple(clauses), specifiers)

    @classmethod
    def any(cls) -> "VersionReq":
        return cls(("*",), SpecifierSet(""))

    def matches(self, version: Version) -> bool:
        """True if ``version`` satisfies every clause.

        Clauses compare by version ordering, so a pre-release such as
        ``1.0.0rc1`` satisfies ``<1.0.0``.
        """
        return all(_clause_matches(spec, version) for spec in self._specifiers)

    def minimum_version(self) -> Optional[Version]:
        """Highest lower bound across all clauses, or None if unbounded below.

        An upper-bound-only clause (``<v``, ``<=v``) contributes ``0.0.0``.
        """
        minimum: Optional[Version] = None
        for spec in self._specifiers:
            bound = _lower_bound(spec)
            if bound is not None and (minimum is None or bound > minimum):
                minimum = bound
        return minimum

    def maximum_version(self) -> Optional[Version]:
        """Lowest upper bound across all clauses, or None if unbounded above."""
        maximum: Optional[Version] = None
        for spec in self._specifiers:
            bound = _upper_bound(spec)
            if bound is not None and (maximum is None or bound < maximum):
                maximum = bound
        return maximum

    def is_satisfiable(self) -> bool:
        """False when the lower bound already exceeds the upper bound."""
        minimum = self.minimum_version()
        maximum = self.maximum_version()
        if minimum is None or maximum is None:
            return True
        return minimum <= maximum

    def overlaps(self, other: "VersionReq") -> bool:
        """Bound-based check whether two requirements can share a version.

        Upper bounds are treated as exclusive.
        """
        own_min, own_max = self.minimum_version(), self.maximum_version()
        other_min, other_max = other.minimum_version(), other.maximum_version()
        if own_min is not None and other_max is not None and own_min >= other_max:
            return False
        if other_min is not None and own_max is not None and other_min >= own_max:
            return False
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionReq):
            return NotImplemented
        return self._specifiers == other._specifiers

    def __hash__(self) -> int:
        return hash(self._specifiers)

    def __str__(self) -> str:
        return ", ".join(self._clauses)

    def __repr__(self) -> str:
        return f"VersionReq({str(self)!r})"

    @classmethod
    def _coerce(cls, value: Any) -> "VersionReq":
        if isinstance(value, VersionReq):
            return value
        return cls.parse(value)

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._coerce,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )

    @classmethod
    def __get_pydantic_json_schema__(cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler) -> JsonSchemaValue:
        return {"type": "string", "examples": [">=0.5.0, <1.0.0", "^1.2"]}


def _clause_matches(spec: Specifier, version: Version) -> bool:
    bound = Version(spec.version)
    operator = spec.operator
    if operator == "<":
        return version < bound
    if operator == "<=":
        return version <= bound
    if operator == ">":
        return version > bound
    if operator == ">=":
        return version >= bound
    if operator == "==":
        return version == bound
    if operator == "!=":
        return version != bound
    # ~=
    return bound <= version < _compatible_release_upper(bound)


def _lower_bound(spec: Specifier) -> Optional[Version]:
    version = Version(spec.version)
    if spec.operator in (">=", "==", "~="):
        return version
    if spec.operator == ">":
        return next_patch(version)
    if spec.operator in ("<", "<="):
        return SENTINEL_VERSION
    return None


def _upper_bound(spec: Specifier) -> Optional[Version]:
    version = Version(spec.version)
    if spec.operator in ("<", "<=", "=="):
        return version
    if spec.operator == "~=":
        return _compatible_release_upper(version)
    return None


def parse_requirement(text: Any) -> VersionReq:
    """Parse a requirement string (existing VersionReq values pass through)."""
    return VersionReq._coerce(text)


# Field type for pydantic models: accepts "1.2.3" or a Version, dumps as str
SemVer = Annotated[
    Version,
    PlainValidator(parse_version),
    PlainSerializer(lambda v: str(v), return_type=str),
    WithJsonSchema({"type": "string", "examples": ["1.2.3"]}),
]
