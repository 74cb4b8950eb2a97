"""Assemble one ClassRecord per Java source file."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import PurePath

from springmap.extractors.java.annotations import AnnotationIndex, annotation_name
from springmap.extractors.java.bodies import method_calls
from springmap.extractors.java.dependencies import infer_dependencies
from springmap.extractors.java.lexical import mask_source
from springmap.extractors.java.members import (
    MethodSignature,
    extract_fields,
    extract_method_signatures,
)
from springmap.extractors.java.signatures import find_class_header, find_imports, find_package
from springmap.extractors.java.spring import (
    combine_path,
    detect_patterns,
    extract_base_path,
    extract_method_mapping,
    is_request_handler,
    recognize_annotations,
)
from springmap.model import (
    ClassRecord,
    EndpointRecord,
    FieldRecord,
    InjectedDependency,
    MethodRecord,
)

logger = logging.getLogger(__name__)

# Files to skip when walking Java sources.
SKIP_FILES = {"package-info.java", "module-info.java"}

_FIELD_INJECTION = ("Autowired", "Inject", "Resource")


class JavaClassExtractor:
    """Turn the text of one Java file into a :class:`ClassRecord`."""

    def can_handle(self, path: str) -> bool:
        name = PurePath(path).name
        return name.endswith(".java") and name not in SKIP_FILES

    def extract(self, path: str, text: str) -> ClassRecord | None:
        code = mask_source(text)
        masked = mask_source(text, literals=True)

        header = find_class_header(masked)
        if header is None:
            logger.debug("No class header in %s", path)
            return None

        index = AnnotationIndex(code)
        class_annotations = index.at(header.start)
        imports = find_imports(code)
        fields = extract_fields(masked, code, index=index)
        signatures = extract_method_signatures(masked, code)

        recognized = recognize_annotations(class_annotations)
        is_controller = is_request_handler(class_annotations)
        base_path = extract_base_path(class_annotations) if is_controller else None

        methods: list[MethodRecord] = []
        endpoints: list[EndpointRecord] = []
        for sig in signatures:
            method = _assemble_method(sig, index, masked)
            methods.append(method)
            if is_controller and method.endpoint is not None:
                endpoints.append(
                    replace(
                        method.endpoint,
                        path=combine_path(base_path, method.endpoint.path),
                        description=f"{method.name}() - {method.return_type}",
                    )
                )

        record = ClassRecord(
            name=header.name,
            file_path=path,
            package=find_package(code),
            imports=tuple(imports),
            methods=tuple(methods),
            fields=tuple(fields),
            annotations=tuple(class_annotations),
            extends=header.extends,
            implements=header.implements,
            dependencies=tuple(infer_dependencies(code, imports, fields, signatures)),
            is_controller=is_controller,
            endpoints=tuple(endpoints),
            recognized_annotations=tuple(recognized),
            architectural_patterns=tuple(detect_patterns(recognized)),
            injected_dependencies=tuple(_injected_dependencies(fields)),
        )
        logger.debug(
            "%s: class %s, %d methods, %d fields, %d endpoints",
            path,
            record.name,
            len(record.methods),
            len(record.fields),
            len(record.endpoints),
        )
        return record


def _assemble_method(sig: MethodSignature, index: AnnotationIndex, masked: str) -> MethodRecord:
    annotations = index.at(sig.start)
    return MethodRecord(
        name=sig.name,
        return_type=sig.return_type,
        parameters=sig.parameters,
        annotations=tuple(annotations),
        visibility=sig.visibility,
        is_static=sig.is_static,
        calls=tuple(method_calls(masked, sig.body_open)),
        endpoint=extract_method_mapping(annotations, sig.name),
    )


def _injected_dependencies(fields: list[FieldRecord]) -> list[InjectedDependency]:
    injected: list[InjectedDependency] = []
    for fld in fields:
        for ann in fld.annotations:
            if annotation_name(ann) in _FIELD_INJECTION:
                injected.append(
                    InjectedDependency(
                        field_name=fld.name,
                        type=fld.type,
                        mechanism="field",
                        annotation=f"@{annotation_name(ann)}",
                    )
                )
                break
    return injected
