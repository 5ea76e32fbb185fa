import pytest

from hierarchy_sections.core.context import SectionContext
from hierarchy_sections.core.models import ChangeKind, SectionSettings


def _titles(ctx):
    return [m.title for m in ctx.registry.ordered()]


def test_rebuild_registers_and_canonicalizes_root_markers(make_context):
    host, ctx = make_context(["Main Camera", "--- Env ---", "Terrain", "---Actors"])

    assert len(ctx.registry) == 2
    assert _titles(ctx) == ["Env", "Actors"]
    assert host.names() == ["Main Camera", "--- Env ---", "Terrain", "--- Actors ---"]
    assert ctx.root_count == 4
    assert "EditorOnly" in host.by_name("--- Env ---").tags


def test_rebuild_does_not_rewrite_canonical_names(make_context):
    host, ctx = make_context(["--- Env ---", "Terrain"])
    assert host.name_writes == []


def test_auto_tag_can_be_disabled(make_context):
    host, _ctx = make_context(["--- Env ---"], settings=SectionSettings(auto_tag_on_register=False))
    assert host.roots[0].tags == set()


def test_deleting_markers_converges_to_dense_ordinals(make_context, reconciler):
    host, ctx = make_context(["--- A ---", "x", "--- B ---", "y", "--- C ---", "--- D ---"])
    host.delete_node(host.by_name("--- A ---"))
    host.delete_node(host.by_name("--- C ---"))

    assert reconciler.handle_change(ctx) is ChangeKind.DELETED
    assert _titles(ctx) == ["B", "D"]
    assert ctx.registry.ordinals() == [0, 1]
    assert ctx.root_count == 4


def test_deleting_non_marker_keeps_registry(make_context, reconciler):
    host, ctx = make_context(["a", "--- M ---", "b", "c", "d"])
    marker = ctx.registry.ordered()[0]
    host.delete_node(host.by_name("d"))

    assert ctx.root_count == 5
    assert reconciler.handle_change(ctx) is ChangeKind.DELETED
    assert ctx.registry.get(marker.identity) is marker
    assert ctx.root_count == 4


def test_reordered_marker_gets_new_ordinal(make_context, reconciler):
    host, ctx = make_context(["a", "b", "--- M1 ---", "c", "d", "--- M2 ---"])
    m1, m2 = host.by_name("--- M1 ---"), host.by_name("--- M2 ---")
    assert ctx.registry.get(m2.id).ordinal == 1

    host.set_sibling_index(m2, 1)
    host.select(m2)
    assert reconciler.handle_change(ctx) is ChangeKind.UNCHANGED

    assert ctx.registry.get(m2.id).ordinal == 0
    assert ctx.registry.get(m1.id).ordinal == 1


def test_rename_of_selected_marker_is_canonicalized(make_context, reconciler):
    host, ctx = make_context(["--- Env ---", "Terrain"])
    node = host.roots[0]
    host.set_display_name(node, "--- Lighting")
    host.select(node)

    reconciler.handle_change(ctx)

    assert node.name == "--- Lighting ---"
    assert ctx.registry.get(node.id).title == "Lighting"


def test_canonical_rename_refreshes_title(make_context, reconciler):
    host, ctx = make_context(["--- Env ---", "Terrain"])
    node = host.roots[0]
    host.set_display_name(node, "--- Lighting ---")
    host.select(node)
    writes = len(host.name_writes)

    reconciler.handle_change(ctx)

    assert ctx.registry.get(node.id).title == "Lighting"
    assert len(host.name_writes) == writes


def test_rename_into_marker_form_is_adopted_when_selected(make_context, reconciler):
    host, ctx = make_context(["Terrain", "Water"])
    terrain, water = host.roots
    host.set_display_name(terrain, "---Terrain")
    host.set_display_name(water, "---Water")
    host.select(terrain)

    reconciler.handle_change(ctx)

    assert terrain.id in ctx.registry
    assert terrain.name == "--- Terrain ---"
    # Unselected renames wait for an explicit rescan.
    assert water.id not in ctx.registry


def test_inserted_selected_marker_is_registered(make_context, reconciler):
    host, ctx = make_context(["a", "--- M ---"])
    new = host.add("--- New", index=0)
    plain = host.add("plain")
    host.select(new, plain)

    assert reconciler.handle_change(ctx) is ChangeKind.INSERTED
    assert new.id in ctx.registry
    assert plain.id not in ctx.registry
    assert new.name == "--- New ---"
    assert ctx.registry.get(new.id).ordinal == 1

    # The next pass notices the marker was never positioned and sorts it.
    reconciler.handle_change(ctx)
    assert ctx.registry.get(new.id).ordinal == 0
    assert ctx.registry.ordinals() == [0, 1]


def test_nested_marker_is_moved_back_to_root(make_context, reconciler):
    host, ctx = make_context(["a", "--- M ---", "b"])
    a, marker = host.by_name("a"), host.by_name("--- M ---")
    host.set_parent(marker, a)

    assert reconciler.handle_change(ctx) is ChangeKind.DELETED
    assert reconciler.handle_change(ctx) is ChangeKind.UNCHANGED

    assert marker.parent is None
    assert marker in host.roots
    assert ctx.root_count == host.root_count() == 3


def test_equal_sibling_indices_keep_registration_order(make_context, reconciler, monkeypatch):
    host, ctx = make_context(["--- First ---", "--- Second ---"])
    monkeypatch.setattr(host, "sibling_index", lambda node: 3)

    reconciler.recompute_order(ctx)

    assert _titles(ctx) == ["First", "Second"]


def test_recompute_drops_stale_identities(make_context, reconciler):
    host, ctx = make_context(["--- A ---", "--- B ---"])
    host.delete_node(host.roots[0])

    reconciler.recompute_order(ctx)

    assert _titles(ctx) == ["B"]
    assert ctx.registry.ordinals() == [0]


def test_canonicalize_ignores_unknown_and_stale(make_context, reconciler):
    host, ctx = make_context(["--- A ---", "plain"])
    a, plain = host.roots
    assert reconciler.canonicalize(ctx, plain.id) is False

    host.delete_node(a)
    assert reconciler.canonicalize(ctx, a.id) is False


def test_order_is_stale_detection(make_context, reconciler):
    host, ctx = make_context(["x", "--- A ---"])
    assert reconciler.order_is_stale(ctx) is False

    host.set_sibling_index(host.by_name("--- A ---"), 0)
    assert reconciler.order_is_stale(ctx) is True


@pytest.mark.parametrize("names", [[], ["a", "b"]])
def test_rebuild_without_markers(names, host, reconciler):
    for name in names:
        host.add(name)
    ctx = SectionContext(host=host)
    assert reconciler.rebuild(ctx) == 0
    assert ctx.root_count == len(names)
