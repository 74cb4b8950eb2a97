"""Data model for extracted Java class structure and relationship graphs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PatternType(str, Enum):
    """Spring stereotype detected on a class."""

    CONTROLLER = "CONTROLLER"
    REST_CONTROLLER = "REST_CONTROLLER"
    SERVICE = "SERVICE"
    REPOSITORY = "REPOSITORY"
    COMPONENT = "COMPONENT"
    CONFIGURATION = "CONFIGURATION"


class LayerType(str, Enum):
    """Architectural layer a stereotype belongs to."""

    PRESENTATION = "Presentation"
    BUSINESS = "Business"
    DATA = "Data"
    CONFIGURATION = "Configuration"
    COMPONENT = "Component"


class RelationKind(str, Enum):
    EXTENDS = "extends"
    IMPLEMENTS = "implements"
    CALLS = "calls"
    INJECTS = "injects"


@dataclass(frozen=True)
class Parameter:
    name: str
    type: str


@dataclass(frozen=True)
class EndpointRecord:
    """An HTTP route derived from request-mapping annotations."""

    http_method: str
    path: str
    produces: str | None = None
    consumes: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class RecognizedAnnotation:
    """A class annotation from the known Spring vocabulary."""

    name: str  # canonical form, e.g. "@Service"
    parameters: tuple[tuple[str, str], ...] = ()  # (key, value) in source order

    def parameter(self, key: str) -> str | None:
        return dict(self.parameters).get(key)


@dataclass(frozen=True)
class ArchitecturalPattern:
    type: PatternType
    description: str
    layer: LayerType


@dataclass(frozen=True)
class InjectedDependency:
    field_name: str
    type: str
    mechanism: str  # only "field" is produced
    annotation: str


@dataclass(frozen=True)
class FieldRecord:
    name: str
    type: str
    visibility: str = "package"  # "public", "protected", "package", "private"
    is_static: bool = False
    annotations: tuple[str, ...] = ()


@dataclass(frozen=True)
class MethodRecord:
    name: str
    return_type: str
    parameters: tuple[Parameter, ...] = ()
    annotations: tuple[str, ...] = ()
    visibility: str = "package"
    is_static: bool = False
    calls: tuple[str, ...] = ()
    endpoint: EndpointRecord | None = None


@dataclass(frozen=True)
class ClassRecord:
    """Structural model of the first class declared in one source file."""

    name: str
    file_path: str
    package: str = ""
    imports: tuple[str, ...] = ()
    methods: tuple[MethodRecord, ...] = ()
    fields: tuple[FieldRecord, ...] = ()
    annotations: tuple[str, ...] = ()
    extends: str | None = None
    implements: tuple[str, ...] = ()
    dependencies: tuple[str, ...] = ()
    is_controller: bool = False
    endpoints: tuple[EndpointRecord, ...] = ()
    recognized_annotations: tuple[RecognizedAnnotation, ...] = ()
    architectural_patterns: tuple[ArchitecturalPattern, ...] = ()
    injected_dependencies: tuple[InjectedDependency, ...] = ()

    @property
    def qualified_name(self) -> str:
        return f"{self.package}.{self.name}" if self.package else self.name


@dataclass(frozen=True)
class RelationshipEdge:
    """A directed, typed edge between two simple class names."""

    source: str
    target: str
    kind: RelationKind
    via: str | None = None  # calling method for "calls" edges


@dataclass(frozen=True)
class ProjectStructure:
    """Complete project structure produced by a scan."""

    classes: tuple[ClassRecord, ...] = ()
    relationships: tuple[RelationshipEdge, ...] = ()

    def find_class(self, name: str) -> ClassRecord | None:
        for cls in self.classes:
            if cls.name == name:
                return cls
        return None

    def edges_of_kind(self, kind: RelationKind) -> list[RelationshipEdge]:
        return [e for e in self.relationships if e.kind == kind]
