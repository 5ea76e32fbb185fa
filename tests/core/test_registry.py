from hierarchy_sections.core.registry import SectionRegistry


def test_try_register_assigns_next_ordinal_and_title():
    registry = SectionRegistry()
    first = registry.try_register(1, "--- Env ---")
    second = registry.try_register(2, "---Actors")

    assert first.ordinal == 0 and first.title == "Env"
    assert second.ordinal == 1 and second.title == "Actors"
    assert registry.identities() == [1, 2]


def test_try_register_rejects_duplicates_and_plain_names():
    registry = SectionRegistry()
    registry.try_register(1, "--- Env ---")

    assert registry.try_register(1, "--- Again ---") is None
    assert registry.try_register(2, "Main Camera") is None
    assert len(registry) == 1
    assert registry.get(1).title == "Env"


def test_unregister_if_dead_only_drops_unresolvable(make_host):
    host = make_host(["--- A ---", "--- B ---"])
    a, b = host.roots
    registry = SectionRegistry()
    registry.try_register(a.id, a.name)
    registry.try_register(b.id, b.name)

    assert registry.unregister_if_dead(a.id, host) is False
    host.delete_node(a)
    assert registry.unregister_if_dead(a.id, host) is True
    assert registry.unregister_if_dead(a.id, host) is False
    assert registry.identities() == [b.id]


def test_prune_dead_counts_removals(make_host):
    host = make_host(["--- A ---", "--- B ---", "--- C ---"])
    registry = SectionRegistry()
    for node in host.roots:
        registry.try_register(node.id, node.name)
    host.delete_node(host.roots[0])
    host.delete_node(host.roots[-1])

    assert registry.prune_dead(host) == 2
    assert len(registry) == 1


def test_reorder_makes_ordinals_dense_and_drops_missing():
    registry = SectionRegistry()
    for identity in (10, 20, 30):
        registry.try_register(identity, "---")
    registry.remove(20)
    assert registry.ordinals() == [0, 2]

    registry.reorder([30, 10, 99])
    assert registry.ordinals() == [0, 1]
    assert [m.identity for m in registry.ordered()] == [30, 10]


def test_find_by_ordinal_and_max_ordinal():
    registry = SectionRegistry()
    assert registry.max_ordinal() == -1
    assert registry.find_by_ordinal(0) is None

    registry.try_register("a", "--- A ---")
    registry.try_register("b", "--- B ---")
    assert registry.max_ordinal() == 1
    assert registry.find_by_ordinal(1).identity == "b"
    assert registry.find_by_ordinal(7) is None


def test_iteration_tolerates_removal():
    registry = SectionRegistry()
    for identity in range(3):
        registry.try_register(identity, "---")
    for marker in registry:
        registry.remove(marker.identity)
    assert len(registry) == 0
