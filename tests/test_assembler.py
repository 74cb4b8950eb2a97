"""End-to-end extraction of single Java files into ClassRecords."""

import pytest

from springmap.extractors.java import JavaClassExtractor
from springmap.model import EndpointRecord, InjectedDependency, LayerType, PatternType

from tests.java_sources import API_INTERFACE, ORDER_CONTROLLER, ORDER_SERVICE


@pytest.fixture
def extractor() -> JavaClassExtractor:
    return JavaClassExtractor()


class TestCanHandle:
    def test_java_sources_only(self, extractor: JavaClassExtractor) -> None:
        assert extractor.can_handle("src/main/java/com/shop/Order.java")
        assert not extractor.can_handle("build.gradle")
        assert not extractor.can_handle("Order.kt")

    def test_package_and_module_info_skipped(self, extractor: JavaClassExtractor) -> None:
        assert not extractor.can_handle("com/shop/package-info.java")
        assert not extractor.can_handle("module-info.java")


class TestScenarios:
    def test_single_line_rest_controller(self, extractor: JavaClassExtractor) -> None:
        text = (
            '@RestController @RequestMapping("/api") public class Foo '
            '{ @GetMapping("/bar") public String baz(){ return null; } }'
        )
        record = extractor.extract("Foo.java", text)

        assert record is not None
        assert record.name == "Foo"
        assert record.is_controller
        assert [(p.type, p.layer) for p in record.architectural_patterns] == [
            (PatternType.REST_CONTROLLER, LayerType.PRESENTATION)
        ]
        assert [(e.http_method, e.path) for e in record.endpoints] == [("GET", "/api/bar")]
        (method,) = record.methods
        assert method.name == "baz"
        assert method.endpoint == EndpointRecord(http_method="GET", path="/bar")
        assert record.endpoints == (
            EndpointRecord(http_method="GET", path="/api/bar", description="baz() - String"),
        )

    def test_field_injection(self, extractor: JavaClassExtractor) -> None:
        record = extractor.extract("Foo.java", "public class Foo { @Autowired private BarService barService; }")

        assert record is not None
        assert record.injected_dependencies == (
            InjectedDependency(
                field_name="barService",
                type="BarService",
                mechanism="field",
                annotation="@Autowired",
            ),
        )

    def test_interface_only_file_has_no_record(self, extractor: JavaClassExtractor) -> None:
        assert extractor.extract("Api.java", API_INTERFACE) is None

    def test_enum_file_has_no_record(self, extractor: JavaClassExtractor) -> None:
        assert extractor.extract("Color.java", "public enum Color { RED, GREEN }") is None


class TestController:
    @pytest.fixture
    def record(self, extractor: JavaClassExtractor):
        record = extractor.extract("web/OrderController.java", ORDER_CONTROLLER)
        assert record is not None
        return record

    def test_header_and_package(self, record) -> None:
        assert record.name == "OrderController"
        assert record.file_path == "web/OrderController.java"
        assert record.package == "com.shop.web"
        assert record.qualified_name == "com.shop.web.OrderController"
        assert record.extends == "BaseController"
        assert record.implements == ("Auditable",)
        assert record.imports == (
            "com.shop.service.OrderService",
            "org.springframework.web.bind.annotation.*",
        )

    def test_wrapped_class_annotations(self, record) -> None:
        assert record.annotations == (
            "@RestController",
            '@RequestMapping( value = "/api/orders", produces = "application/json")',
        )
        assert [a.name for a in record.recognized_annotations] == ["@RestController", "@RequestMapping"]
        assert record.recognized_annotations[1].parameters == (
            ("value", "/api/orders"),
            ("produces", "application/json"),
        )
        assert hash(record) == hash(record)

    def test_methods_and_calls(self, record) -> None:
        assert [m.name for m in record.methods] == ["get", "create", "validate"]
        get, create, validate = record.methods
        assert get.calls == ("find",)
        assert create.calls == ("validate", "save")
        assert validate.calls == ("IllegalArgumentException",)
        assert validate.annotations == ()
        assert get.parameters[0].name == "id"
        assert get.parameters[0].type == "Long"

    def test_endpoints_combine_base_path(self, record) -> None:
        assert [(e.http_method, e.path, e.description) for e in record.endpoints] == [
            ("GET", "/api/orders/{id}", "get() - Order"),
            ("POST", "/api/orders/create", "create() - Order"),
        ]
        get, create, validate = record.methods
        assert get.endpoint == EndpointRecord(http_method="GET", path="/{id}")
        assert create.endpoint == EndpointRecord(http_method="POST", path="/create")
        assert validate.endpoint is None

    def test_injected_field(self, record) -> None:
        assert [(f.name, f.type, f.visibility) for f in record.fields] == [
            ("orderService", "OrderService", "private")
        ]
        assert [i.field_name for i in record.injected_dependencies] == ["orderService"]


class TestNonController:
    def test_method_mapping_without_class_endpoints(self, extractor: JavaClassExtractor) -> None:
        text = (
            "@Service\n"
            "public class Worker {\n"
            '    @GetMapping("/nope")\n'
            "    public void work() {\n"
            "    }\n"
            "}\n"
        )
        record = extractor.extract("Worker.java", text)
        assert record is not None
        assert not record.is_controller
        assert record.endpoints == ()
        assert record.methods[0].endpoint == EndpointRecord(http_method="GET", path="/nope")
        assert record.methods[0].annotations == ('@GetMapping("/nope")',)

    def test_service_record(self, extractor: JavaClassExtractor) -> None:
        record = extractor.extract("OrderService.java", ORDER_SERVICE)
        assert record is not None
        assert [p.type for p in record.architectural_patterns] == [PatternType.SERVICE]
        assert record.imports == (
            "com.shop.repo.OrderRepository",
            "static org.junit.Assert.assertTrue",
            "java.util.*",
        )
        assert [f.name for f in record.fields] == ["orderRepository", "count"]

    def test_resource_counts_as_injected(self, extractor: JavaClassExtractor) -> None:
        text = "public class Job {\n    @Resource(name = \"mailer\")\n    private Mailer mailer;\n}\n"
        record = extractor.extract("Job.java", text)
        assert record is not None
        assert [(i.type, i.annotation) for i in record.injected_dependencies] == [("Mailer", "@Resource")]
