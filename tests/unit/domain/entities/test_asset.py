from __future__ import annotations

from cdnrelay.domain.entities.asset import (
    AssetKind,
    Container,
    InjectedElement,
    PageDocument,
    script_flags,
)
from cdnrelay.domain.entities.manifest import DeliveryMode


def _element(asset_id: str, container: Container = Container.BODY) -> InjectedElement:
    return InjectedElement(
        asset_id=asset_id,
        kind=AssetKind.SCRIPT,
        url=f"http://cdn/{asset_id}",
        container=container,
    )


def test_asset_kind_from_filename() -> None:
    assert AssetKind.from_filename("app-0123456789ab.js") is AssetKind.SCRIPT
    assert AssetKind.from_filename("THEME.CSS") is AssetKind.STYLESHEET
    assert AssetKind.from_filename("logo.png") is None


def test_script_flags_per_mode() -> None:
    assert script_flags(DeliveryMode.DEFER) == (True, False)
    assert script_flags(DeliveryMode.ASYNC) == (False, True)
    assert script_flags(DeliveryMode.SYNC) == (False, False)


def test_page_document_insert_at_position_and_append() -> None:
    document = PageDocument()
    tail = _element("tail.js")
    head = _element("head.js")

    document.insert(tail)
    document.insert(head, position=0)

    assert [e.asset_id for e in document.body] == ["head.js", "tail.js"]
    assert document.head == []


def test_page_document_remove_by_identity() -> None:
    document = PageDocument()
    first = _element("same.js", Container.HEAD)
    second = _element("same.js", Container.HEAD)
    document.insert(first)
    document.insert(second)

    document.remove(second)

    assert len(document.head) == 1
    assert document.head[0] is first
