"""Tests for the canonical numbering catalog."""

import pytest
from docx import Document

from html_numbering.config import NumberingConfig
from html_numbering.exceptions import NumberingError
from html_numbering.numbering.registry import AbstractNumberingRegistry
from html_numbering.numbering.store import NumberingStore
from html_numbering.numbering.templates import CANONICAL_NAMES, HEADING_NUMBERING_NAME


@pytest.fixture
def registry(blank_store):
    reg = AbstractNumberingRegistry(blank_store)
    reg.initialize()
    return reg


# ---------------------------------------------------------------------------
# Initialization
# ---------------------------------------------------------------------------

class TestInitialize:
    def test_installs_catalog_on_empty_store(self, blank_store):
        registry = AbstractNumberingRegistry(blank_store)
        assert registry.initialize() is True

        definitions = blank_store.definitions()
        assert [d.name for d in definitions] == list(CANONICAL_NAMES)
        assert [d.definition_id for d in definitions] == list(range(9))

    def test_initialize_is_idempotent(self, registry, blank_store):
        before = len(blank_store.definitions())
        assert registry.initialize() is False
        assert len(blank_store.definitions()) == before

    def test_new_registry_on_same_document_does_not_reinstall(self, blank_document):
        AbstractNumberingRegistry(NumberingStore.from_document(blank_document)).initialize()
        again = AbstractNumberingRegistry(NumberingStore.from_document(blank_document))
        assert again.initialize() is False
        assert len(again.store.definitions()) == 9

    def test_catalog_follows_existing_definitions(self, seeded_store):
        AbstractNumberingRegistry(seeded_store).initialize()
        ids = [d.definition_id for d in seeded_store.definitions()]
        assert ids == [3, 5] + list(range(6, 15))
        # all definitions stay ahead of the instances
        tags = [child.tag.rsplit("}", 1)[-1] for child in seeded_store.element]
        assert tags == ["abstractNum"] * 11 + ["num"] * 2

    def test_existing_instances_untouched(self, seeded_store):
        AbstractNumberingRegistry(seeded_store).initialize()
        assert [(i.instance_id, i.definition_id) for i in seeded_store.instances()] == [(1, 3), (4, 5)]

    def test_default_template(self):
        store = NumberingStore.from_document(Document())
        AbstractNumberingRegistry(store).initialize()
        assert [d.definition_id for d in store.definitions()][-9:] == list(range(9, 18))

    def test_bullet_levels_have_no_start(self, registry):
        disc = registry.find_by_name("disc").first_level
        assert disc.num_format == "bullet"
        assert disc.level_text == "•"
        assert disc.start is None

    def test_indent_from_config(self, blank_store):
        registry = AbstractNumberingRegistry(blank_store, NumberingConfig(indent_twips=500))
        registry.initialize()
        definition = registry.find_by_name("decimal")
        registry.promote_to_multi_level(definition.definition_id)
        assert definition.level(0).indent_left == 0
        assert definition.level(1).indent_left == 500


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------

class TestLookup:
    @pytest.mark.parametrize("list_type,fmt", [
        ("decimal", "decimal"),
        ("upper-roman", "upperRoman"),
        ("LOWER-ALPHA", "lowerLetter"),
        ("lower-latin", "lowerLetter"),
        ("square", "bullet"),
    ])
    def test_known_types(self, registry, list_type, fmt):
        assert registry.lookup(list_type).first_level.num_format == fmt

    def test_unknown_ordered_falls_back_to_decimal(self, registry):
        assert registry.lookup("hebrew", ordered=True).name == "decimal"

    def test_unknown_unordered_falls_back_to_disc(self, registry):
        assert registry.lookup("none").name == "disc"

    def test_missing_type(self, registry):
        assert registry.lookup(None, ordered=True).name == "decimal"
        assert registry.lookup("", ordered=False).name == "disc"

    def test_lookup_without_catalog_raises(self, blank_store):
        with pytest.raises(NumberingError):
            AbstractNumberingRegistry(blank_store).lookup("decimal")


# ---------------------------------------------------------------------------
# Promotion
# ---------------------------------------------------------------------------

class TestPromotion:
    def test_promote_decimal(self, registry):
        definition = registry.find_by_name("decimal")
        assert registry.promote_to_multi_level(definition.definition_id) is True

        assert definition.is_multi_level
        levels = definition.levels
        assert [lvl.level_index for lvl in levels] == list(range(9))
        assert [lvl.level_text for lvl in levels] == [f"%{n}." for n in range(1, 10)]
        assert levels[2].indent_left == 720 * 2

    def test_promote_twice_is_noop(self, registry):
        definition_id = registry.find_by_name("upper-roman").definition_id
        registry.promote_to_multi_level(definition_id)
        assert registry.promote_to_multi_level(definition_id) is False
        assert len(registry.find(definition_id).levels) == 9

    def test_promote_bullet_keeps_glyph(self, registry):
        definition = registry.find_by_name("square")
        registry.promote_to_multi_level(definition.definition_id)
        assert {lvl.level_text for lvl in definition.levels} == {"▪"}
        assert {lvl.num_format for lvl in definition.levels} == {"bullet"}

    def test_heading_definition_always_cascades(self, registry):
        definition = registry.find_by_name(HEADING_NUMBERING_NAME)
        registry.promote_to_multi_level(definition.definition_id)
        assert definition.level(2).level_text == "%1.%2.%3."
        assert definition.level(2).indent_left == 0

    def test_promote_unknown_raises(self, registry):
        with pytest.raises(NumberingError):
            registry.promote_to_multi_level(999)
