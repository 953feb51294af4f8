"""
Tests for the high-level export API.

A FakeConnection stands in for CATIA so the document lifecycle (open,
resolve, close) and per-document isolation can be checked end to end.
"""

import logging
from unittest.mock import Mock

import pytest

import cadtreelib.api
from cadtreelib import (
    CadHandle,
    CollectingEventSink,
    EventCode,
    ExportConfigError,
    ObjectKind,
    export_document,
    export_documents,
    export_part,
    parse_paths,
)
from cadtreelib.testing import (
    DrawingDocument,
    FakeConnection,
    PartDocument,
    example_part,
)


@pytest.fixture
def connection(assembly_document):
    return FakeConnection(
        {
            "C:/models/Bracket.CATPart": PartDocument("Bracket.CATPart", example_part("Bracket")),
            "C:/models/Asm.CATProduct": assembly_document,
            "C:/models/Sheet.CATDrawing": DrawingDocument("Sheet.CATDrawing"),
            "C:/models/Locked.CATPart": PartDocument("Locked.CATPart", example_part("Locked")),
        },
        unopenable=["C:/models/Locked.CATPart"],
    )


class TestParsePaths:

    def test_split_and_strip(self):
        assert parse_paths(" a.CATPart ;b.CATProduct; ") == ["a.CATPart", "b.CATProduct"]

    def test_empty(self):
        assert parse_paths(";;") == []


class TestExportDocuments:

    def test_results_in_input_order(self, connection, sink):
        roots = export_documents(
            ["C:/models/Asm.CATProduct", "C:/models/Bracket.CATPart"],
            connection=connection, sink=sink,
        )
        assert [r.name for r in roots] == ["Asm", "Bracket"]
        assert connection.closed == connection.opened

    def test_semicolon_string(self, connection, sink):
        roots = export_documents("C:/models/Bracket.CATPart;C:/models/Asm.CATProduct",
                                 "flatten", connection=connection, sink=sink)
        assert [r.name for r in roots] == ["Bracket", "Asm"]
        assert roots[0].children[0].name == "Geo1/Feat1"

    def test_failing_documents_are_skipped(self, connection, sink):
        roots = export_documents(
            [
                "C:/models/Missing.CATPart",
                "C:/models/Locked.CATPart",
                "C:/models/Sheet.CATDrawing",
                "C:/models/Bracket.CATPart",
            ],
            connection=connection, sink=sink,
        )
        assert [r.name for r in roots] == ["Bracket"]
        assert EventCode.DOCUMENT_NOT_FOUND in sink.codes()
        assert EventCode.DOCUMENT_OPEN_FAILED in sink.codes()
        assert EventCode.DOCUMENT_UNSUPPORTED in sink.codes()
        # The drawing was opened, so it is closed again
        assert "C:/models/Sheet.CATDrawing" in connection.closed

    def test_opened_is_reported_at_info(self, connection, sink):
        export_documents(["C:/models/Bracket.CATPart"], connection=connection, sink=sink)
        opened = sink.by_code(EventCode.DOCUMENT_OPENED)
        assert len(opened) == 1
        assert opened[0].level == logging.INFO

    def test_document_failure_is_isolated(self, connection, sink):
        broken = PartDocument("Broken.CATPart", example_part("Broken")).fail("Part")
        connection.documents["C:/models/Broken.CATPart"] = broken

        roots = export_documents(["C:/models/Broken.CATPart", "C:/models/Bracket.CATPart"],
                                 connection=connection, sink=sink)
        assert [r.name for r in roots] == ["Bracket"]
        assert sink.by_code(EventCode.DOCUMENT_FAILED)[0].subject == "C:/models/Broken.CATPart"
        assert broken.closed == 1

    def test_close_failure_is_reported(self, connection, sink):
        document = connection.documents["C:/models/Bracket.CATPart"]
        document.fail("Close")

        roots = export_documents(["C:/models/Bracket.CATPart"], connection=connection, sink=sink)
        assert [r.name for r in roots] == ["Bracket"]
        assert EventCode.DOCUMENT_CLOSE_FAILED in sink.codes()

    def test_depth_and_options_are_applied(self, connection, sink):
        roots = export_documents(["C:/models/Asm.CATProduct"], "full", 1,
                                 connection=connection, sink=sink,
                                 include_product_properties=False)
        assert roots[0].to_dict() == {
            "name": "Asm", "kind": "Product", "children": [
                {"name": "Bracket.1", "kind": "Product"},
            ],
        }

    def test_default_sink_logs(self, connection, caplog):
        with caplog.at_level(logging.WARNING, logger="cadtreelib"):
            export_documents(["C:/models/Missing.CATPart"], connection=connection)
        assert "document_not_found" in caplog.text


class TestInputValidation:

    @pytest.mark.parametrize("kwargs", [
        {"mode": "tree"},
        {"max_depth": -1},
        {"max_depth": "3"},
        {"colour": "red"},
    ])
    def test_invalid_input_opens_nothing(self, connection, kwargs):
        with pytest.raises(ExportConfigError):
            export_documents(["C:/models/Bracket.CATPart"], connection=connection, **kwargs)
        assert connection.opened == []

    def test_non_string_paths(self, connection):
        with pytest.raises(ExportConfigError):
            export_documents(["C:/models/Bracket.CATPart", 3], connection=connection)
        with pytest.raises(ExportConfigError):
            export_documents(42, connection=connection)
        assert connection.opened == []


class TestOwnedConnection:

    def test_connection_created_and_released(self, monkeypatch, connection):
        factory = Mock(return_value=connection)
        monkeypatch.setattr(cadtreelib.api, "CatiaConnection", factory)

        roots = export_documents(["C:/models/Bracket.CATPart"], sink=CollectingEventSink())
        assert [r.name for r in roots] == ["Bracket"]
        factory.assert_called_once_with()
        assert not connection.connected

    def test_empty_path_list_never_connects(self, monkeypatch):
        factory = Mock()
        monkeypatch.setattr(cadtreelib.api, "CatiaConnection", factory)

        assert export_documents([" ", ""], sink=CollectingEventSink()) == []
        assert export_documents(";;", sink=CollectingEventSink()) == []
        factory.assert_not_called()

    def test_passed_connection_is_left_open(self, connection, sink):
        connection.connect()
        export_documents(["C:/models/Bracket.CATPart"], connection=connection, sink=sink)
        assert connection.connected


class TestSingleObjectExport:

    def test_export_document(self, assembly_document, sink):
        node = export_document(assembly_document, "flatten", sink=sink)
        assert node.child("Bracket.1").child("Geo1/Feat1") is not None

    def test_export_part_accepts_raw_object(self, part, sink):
        node = export_part(part, "full", 1, sink=sink)
        assert node.to_dict() == {
            "name": "Part1", "kind": "Part", "children": [
                {"name": "Geo1", "kind": "HybridBody"},
            ],
        }

    def test_export_part_accepts_handle(self, part, sink):
        node = export_part(CadHandle(part, ObjectKind.PART), "flatten", sink=sink)
        assert node.children[0].name == "Geo1/Feat1"
