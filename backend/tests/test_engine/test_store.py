"""Tests for LayerStore mutations and totals."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from metre.engine.store import LayerStore
from metre.errors import InvalidOperationError, NotFoundError
from metre.models.project import (
    Layer,
    LayerCategory,
    LayerKind,
    Project,
    Shape,
    ShapeKind,
    new_project,
)
from tests.conftest import ROOF_TRIANGLE


def _shape(layer: Layer, value: float, name: str = "s") -> Shape:
    kind = ShapeKind.POLYGON if layer.kind == LayerKind.SURFACE else ShapeKind.POLYLINE
    return Shape(name=name, kind=kind, points=list(ROOF_TRIANGLE), layer_id=layer.id, measured_value=value)


def _imported(name: str = "Cadastre") -> Layer:
    return Layer(name=name, color="#9ca3af", kind=LayerKind.MIXED,
                 category=LayerCategory.IMPORTED, opacity=0.6)


# ── Layers ──


class TestAddLayer:
    def test_surface_defaults(self, store):
        layer = store.add_layer("Toiture", LayerKind.SURFACE, "#ef4444")
        assert layer.opacity == 0.5
        assert layer.is_visible
        assert layer.category == LayerCategory.MEASUREMENT
        assert store.project.active_layer_id == layer.id

    def test_length_defaults(self, store):
        layer = store.add_layer("Clôtures", LayerKind.LENGTH, "#3b82f6")
        assert layer.opacity == 1.0
        assert layer.unit == "m"

    def test_mixed_rejected(self, store):
        with pytest.raises(InvalidOperationError):
            store.add_layer("Bad", LayerKind.MIXED, "#000000")
        assert store.project.layers == []

    def test_clears_selection(self, store):
        first = store.add_layer("A", LayerKind.SURFACE, "#ef4444")
        shape = store.add_shape(_shape(first, 1.0))
        store.select_shape(shape.id)
        store.add_layer("B", LayerKind.LENGTH, "#3b82f6")
        assert store.project.selected_shape_id is None


def test_default_project_seeds_walls_layer():
    project = new_project()
    assert [l.name for l in project.layers] == ["Murs"]
    walls = project.layers[0]
    assert walls.kind == LayerKind.SURFACE
    assert walls.color == "#ef4444"
    assert walls.opacity == 0.5
    assert project.active_layer_id == walls.id


def test_empty_project_when_not_seeded():
    assert new_project(seed_default_layer=False).layers == []


class TestDeleteLayer:
    def test_cascades_to_shapes(self, store):
        a = store.add_layer("A", LayerKind.SURFACE, "#ef4444")
        b = store.add_layer("B", LayerKind.LENGTH, "#3b82f6")
        store.add_shape(_shape(a, 10.0))
        store.add_shape(_shape(a, 5.0))
        kept = store.add_shape(_shape(b, 3.0))

        store.delete_layer(a.id)

        assert [l.id for l in store.project.layers] == [b.id]
        assert store.project.shapes == [kept]
        assert a.id not in store.layer_totals()

    def test_clears_active_and_selection(self, store):
        a = store.add_layer("A", LayerKind.SURFACE, "#ef4444")
        shape = store.add_shape(_shape(a, 1.0))
        store.select_shape(shape.id)
        store.delete_layer(a.id)
        assert store.project.active_layer_id is None
        assert store.project.selected_shape_id is None

    def test_keeps_other_active_layer(self, store):
        a = store.add_layer("A", LayerKind.SURFACE, "#ef4444")
        b = store.add_layer("B", LayerKind.SURFACE, "#3b82f6")
        store.delete_layer(a.id)
        assert store.project.active_layer_id == b.id

    def test_idempotent(self, store):
        a = store.add_layer("A", LayerKind.SURFACE, "#ef4444")
        store.delete_layer(a.id)
        revision = store.project.revision
        store.delete_layer(a.id)
        store.delete_layer("missing")
        assert store.project.revision == revision


def test_set_active_layer_unknown(store):
    with pytest.raises(NotFoundError):
        store.set_active_layer("missing")


def test_toggle_visibility(store):
    layer = store.add_layer("A", LayerKind.SURFACE, "#ef4444")
    assert store.toggle_visibility(layer.id).is_visible is False
    assert store.toggle_visibility(layer.id).is_visible is True


@pytest.mark.parametrize("value,expected", [(0.3, 0.3), (-2.0, 0.0), (1.7, 1.0)])
def test_set_opacity_clamped(store, value, expected):
    layer = store.add_layer("A", LayerKind.SURFACE, "#ef4444")
    assert store.set_opacity(layer.id, value).opacity == expected


def test_opacity_unknown_layer(store):
    with pytest.raises(NotFoundError):
        store.set_opacity("missing", 0.5)


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_set_opacity_rejects_non_finite(store, value):
    layer = store.add_layer("A", LayerKind.SURFACE, "#ef4444")
    with pytest.raises(InvalidOperationError):
        store.set_opacity(layer.id, value)
    assert layer.opacity == 0.5


def test_category_is_frozen(store):
    layer = store.add_layer("A", LayerKind.SURFACE, "#ef4444")
    with pytest.raises(ValidationError):
        layer.category = LayerCategory.IMPORTED


def test_measurement_layer_cannot_be_mixed():
    with pytest.raises(ValidationError):
        Layer(name="M", color="#ef4444", kind=LayerKind.MIXED)


@pytest.mark.parametrize("kind", [LayerKind.SURFACE, LayerKind.LENGTH])
def test_imported_layer_must_be_mixed(kind):
    with pytest.raises(ValidationError):
        Layer(name="I", color="#9ca3af", kind=kind, category=LayerCategory.IMPORTED)


# ── Shapes ──


def test_add_shape_unknown_layer(store):
    orphan = Shape(name="x", kind=ShapeKind.POLYGON, points=list(ROOF_TRIANGLE), layer_id="missing")
    with pytest.raises(InvalidOperationError):
        store.add_shape(orphan)
    assert store.project.shapes == []


def test_delete_shape_clears_selection(store):
    layer = store.add_layer("A", LayerKind.SURFACE, "#ef4444")
    shape = store.add_shape(_shape(layer, 1.0))
    store.select_shape(shape.id)
    store.delete_shape(shape.id)
    assert store.project.shapes == []
    assert store.project.selected_shape_id is None
    store.delete_shape(shape.id)


def test_select_unknown_shape(store):
    with pytest.raises(NotFoundError):
        store.select_shape("missing")
    assert store.select_shape(None) is None


def test_negative_measurement_rejected():
    with pytest.raises(ValidationError):
        Shape(name="x", kind=ShapeKind.POLYLINE, points=[], layer_id="l", measured_value=-1.0)


# ── Imports ──


def test_add_imported_commits_batch(store):
    layer = _imported()
    shape = Shape(name="p", kind=ShapeKind.POLYGON, points=list(ROOF_TRIANGLE), layer_id=layer.id)
    store.add_imported([layer], [shape])
    assert store.project.layers == [layer]
    assert store.project.shapes == [shape]


def test_add_imported_all_or_nothing(store):
    good = _imported()
    orphan = Shape(name="p", kind=ShapeKind.POLYGON, points=list(ROOF_TRIANGLE), layer_id="missing")
    with pytest.raises(InvalidOperationError):
        store.add_imported([good], [orphan])
    assert store.project.layers == []
    assert store.project.shapes == []


def test_add_imported_rejects_measurement_layer(store):
    layer = Layer(name="M", color="#ef4444", kind=LayerKind.SURFACE)
    with pytest.raises(InvalidOperationError):
        store.add_imported([layer], [])


def test_add_imported_rejects_non_mixed_layer(store):
    # Skips model validation to reach the store's own check
    layer = Layer.model_construct(name="I", color="#9ca3af", kind=LayerKind.SURFACE,
                                  category=LayerCategory.IMPORTED)
    with pytest.raises(InvalidOperationError):
        store.add_imported([layer], [])
    assert store.project.layers == []


def test_draw_order_puts_imported_below(store):
    measured = store.add_layer("A", LayerKind.SURFACE, "#ef4444")
    imported = _imported()
    store.add_imported([imported], [])
    assert [l.id for l in store.draw_order()] == [imported.id, measured.id]


# ── Totals ──


def test_layer_totals_sum_shapes(store):
    a = store.add_layer("A", LayerKind.SURFACE, "#ef4444")
    b = store.add_layer("B", LayerKind.LENGTH, "#3b82f6")
    store.add_shape(_shape(a, 10.0))
    store.add_shape(_shape(a, 2.5))
    assert store.layer_totals() == {a.id: 12.5, b.id: 0.0}
    assert store.layer_total(b.id) == 0.0


def test_imported_layer_has_no_total(store):
    layer = _imported()
    store.add_imported([layer], [])
    assert layer.id not in store.layer_totals()
    assert store.layer_total(layer.id) is None


def test_totals_follow_mutations(store):
    a = store.add_layer("A", LayerKind.SURFACE, "#ef4444")
    first = store.add_shape(_shape(a, 4.0))
    assert store.layer_total(a.id) == 4.0
    store.add_shape(_shape(a, 6.0))
    assert store.layer_total(a.id) == 10.0
    store.delete_shape(first.id)
    assert store.layer_total(a.id) == 6.0


def test_totals_copy_not_shared(store):
    a = store.add_layer("A", LayerKind.SURFACE, "#ef4444")
    store.layer_totals()[a.id] = 99.0
    assert store.layer_total(a.id) == 0.0


def test_every_mutation_bumps_revision():
    store = LayerStore(Project())
    revisions = [store.project.revision]
    layer = store.add_layer("A", LayerKind.SURFACE, "#ef4444")
    revisions.append(store.project.revision)
    store.add_shape(_shape(layer, 1.0))
    revisions.append(store.project.revision)
    store.set_opacity(layer.id, 0.2)
    revisions.append(store.project.revision)
    assert revisions == sorted(set(revisions))
