"""Tests for label requests."""

from types import SimpleNamespace

import pytest
from pydantic import TypeAdapter

from wit.labels.requests import (
    BatchItemLabelsRequest,
    BatchLocationLabelsRequest,
    ItemLabelRequest,
    LabelRequest,
    LabelRequestError,
    LocationLabelRequest,
    build_label_request,
    ref_id,
)

from conftest import FakeLabelProvider, make_item_label, make_location_label


class TestRefId:
    """Tests for ref_id."""

    def test_string(self):
        assert ref_id("abc") == "abc"

    def test_mapping(self):
        assert ref_id({"id": "abc"}) == "abc"
        assert ref_id({"_id": "def"}) == "def"

    def test_object(self):
        assert ref_id(SimpleNamespace(id=42)) == "42"

    @pytest.mark.parametrize("ref", [None, "", {}, {"name": "Hammer"}, SimpleNamespace(name="x")])
    def test_missing(self, ref):
        assert ref_id(ref) is None


class TestBuildLabelRequest:
    """Tests for build_label_request."""

    def test_item(self):
        assert build_label_request("item", item={"id": "abc"}) == ItemLabelRequest(id="abc")

    def test_item_missing(self):
        with pytest.raises(LabelRequestError, match="No item selected"):
            build_label_request("item")

    def test_location(self):
        assert build_label_request("location", location="loc1") == LocationLabelRequest(id="loc1")

    def test_location_missing(self):
        with pytest.raises(LabelRequestError):
            build_label_request("location", item="abc")

    def test_batch_items(self):
        request = build_label_request("batch", items=[{"id": "a"}, {"id": "b"}])
        assert request == BatchItemLabelsRequest(ids=("a", "b"))

    def test_batch_locations(self):
        request = build_label_request("batch", locations=["x"])
        assert request == BatchLocationLabelsRequest(ids=("x",))

    def test_batch_empty(self):
        """Nothing selected is an empty result, not an error."""
        assert build_label_request("batch") is None

    def test_batch_mixed(self):
        with pytest.raises(LabelRequestError):
            build_label_request("batch", items=["a"], locations=["x"])

    def test_batch_reference_without_id(self):
        with pytest.raises(LabelRequestError):
            build_label_request("batch", items=[{"name": "Hammer"}])

    def test_unknown_mode(self):
        with pytest.raises(LabelRequestError, match="Unknown label mode"):
            build_label_request("shelf", item="abc")

    def test_discriminated_union(self):
        adapter = TypeAdapter(LabelRequest)
        request = adapter.validate_python({"kind": "batch_locations", "ids": ["x", "y"]})
        assert isinstance(request, BatchLocationLabelsRequest)


class TestDispatch:
    """Each request maps to exactly one provider call."""

    @pytest.fixture
    def provider(self):
        return FakeLabelProvider(
            {
                "a": make_item_label(id="a", name="Hammer"),
                "b": make_item_label(id="b", name="Wrench"),
                "x": make_location_label(id="x", item_count=1),
            }
        )

    @pytest.mark.asyncio
    async def test_item(self, provider):
        labels = await ItemLabelRequest(id="a").dispatch(provider)
        assert [label.name for label in labels] == ["Hammer"]
        assert provider.calls == [("item", "a")]

    @pytest.mark.asyncio
    async def test_location(self, provider):
        labels = await LocationLabelRequest(id="x").dispatch(provider)
        assert len(labels) == 1
        assert provider.calls == [("location", "x")]

    @pytest.mark.asyncio
    async def test_batch_single_call(self, provider):
        labels = await BatchItemLabelsRequest(ids=("b", "a")).dispatch(provider)
        assert [label.name for label in labels] == ["Wrench", "Hammer"]
        assert provider.calls == [("batch_items", ["b", "a"])]

    @pytest.mark.asyncio
    async def test_batch_locations(self, provider):
        await BatchLocationLabelsRequest(ids=("x",)).dispatch(provider)
        assert provider.calls == [("batch_locations", ["x"])]
