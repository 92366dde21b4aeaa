"""
Core domain models for the API docs generator.

These models describe a resource service the way the operation templates see
it: the shape of its id, the schema names wired to each request/response
role, and the options a service declares about its own documentation.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from ..constants import DefaultConfig, HttpMethods, OperationNames
from ..exceptions import raise_configuration_error
from ..security import security as default_security_resolver


IdValue = Union[str, List[str], Tuple[str, ...]]


@dataclass(frozen=True)
class SingleId:
    """A resource addressed by one id field."""

    name: str
    type: str = DefaultConfig.ID_TYPE

    def pairs(self) -> List[Tuple[str, str]]:
        return [(self.name, self.type)]


@dataclass(frozen=True)
class CompositeId:
    """A resource addressed by several id fields, in path order."""

    names: Tuple[str, ...]
    types: Tuple[str, ...]

    def pairs(self) -> List[Tuple[str, str]]:
        return list(zip(self.names, self.types))


IdSpec = Union[SingleId, CompositeId]


def _as_list(value: IdValue) -> List[str]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def normalize_id(id_name: IdValue, id_type: IdValue = DefaultConfig.ID_TYPE) -> IdSpec:
    """
    Normalize an id name/type pair into a SingleId or CompositeId.

    A single type is broadcast across every name. Lists of different lengths
    are rejected rather than silently truncated.

    Raises:
        ConfigurationError: if no id name is given or the lengths disagree.
    """
    names = _as_list(id_name)
    types = _as_list(id_type)

    if not names:
        raise_configuration_error("At least one id name is required")

    if len(types) == 1 and len(names) > 1:
        types = types * len(names)
    elif len(types) != len(names):
        raise_configuration_error(
            f"id_name has {len(names)} entries but id_type has {len(types)}",
            context={"id_name": names, "id_type": types},
        )

    if len(names) == 1:
        return SingleId(names[0], types[0])
    return CompositeId(tuple(names), tuple(types))


class RefTable(Mapping[str, str]):
    """
    Lookup from a semantic role (``getResponse``, ``createRequest``, ...) to a
    schema name in ``components.schemas``.

    Roles mapped to an empty value count as absent, so ``get`` returning
    ``None`` is the only signal templates need to check.
    """

    def __init__(self, refs: Optional[Mapping[str, Optional[str]]] = None):
        self._refs: Dict[str, str] = {
            role: name for role, name in (refs or {}).items() if name
        }

    @classmethod
    def coerce(cls, refs: Union["RefTable", Mapping[str, Optional[str]], None]) -> "RefTable":
        if isinstance(refs, RefTable):
            return refs
        return cls(refs)

    def __getitem__(self, role: str) -> str:
        return self._refs[role]

    def __iter__(self) -> Iterator[str]:
        return iter(self._refs)

    def __len__(self) -> int:
        return len(self._refs)

    def __repr__(self) -> str:
        return f"RefTable({self._refs!r})"

    def request_for(self, method: str) -> Optional[str]:
        return self.get(f"{method}Request")

    def response_for(self, method: str) -> Optional[str]:
        return self.get(f"{method}Response")

    def with_defaults(self, defaults: Mapping[str, str]) -> "RefTable":
        """Return a new table where this table's entries override ``defaults``."""
        merged = dict(defaults)
        merged.update(self._refs)
        return RefTable(merged)


SecurityResolver = Callable[[str, Optional[List[str]], Any], List[Dict[str, Any]]]


@dataclass
class OperationContext:
    """Everything an operation template needs to describe one operation."""

    tags: List[str]
    model_name: str
    id_name: IdValue = DefaultConfig.ID_NAME
    id_type: IdValue = DefaultConfig.ID_TYPE
    security: Optional[Any] = None
    securities: Optional[List[str]] = None
    refs: RefTable = field(default_factory=RefTable)
    resolve_security: SecurityResolver = default_security_resolver

    def __post_init__(self):
        self.refs = RefTable.coerce(self.refs)
        # Reject bad id shapes here so templates never have to
        self.ids: IdSpec = normalize_id(self.id_name, self.id_type)

    def security_for(self, operation_name: str) -> List[Dict[str, Any]]:
        return self.resolve_security(operation_name, self.securities, self.security)


@dataclass
class CustomOperation:
    """A service method beyond the standard CRUD set."""

    method: str
    http_method: str = HttpMethods.POST
    with_id: bool = False

    def __post_init__(self):
        self.http_method = self.http_method.lower()


@dataclass
class ServiceDocs:
    """
    Documentation options a service declares about itself.

    Only ``methods`` listed here get an operation; multi-item variants are
    added for the bases named in ``multi`` (or ``"all"``).
    """

    enabled: bool = True
    model: Optional[str] = None
    model_name: Optional[str] = None
    tag: Optional[str] = None
    description: Optional[str] = None
    id_name: Optional[IdValue] = None
    id_type: Optional[IdValue] = None
    methods: List[str] = field(default_factory=lambda: list(OperationNames.STANDARD))
    multi: List[str] = field(default_factory=list)
    securities: List[str] = field(default_factory=list)
    refs: Dict[str, str] = field(default_factory=dict)
    definition: Optional[Any] = None
    schema: Optional[Any] = None
    definitions: Optional[Dict[str, Any]] = None
    schemas: Optional[Dict[str, Any]] = None
    custom_methods: List[CustomOperation] = field(default_factory=list)
    operations: Dict[str, Union[Dict[str, Any], bool]] = field(default_factory=dict)
