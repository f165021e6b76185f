"""Unit tests for the Entry model."""

from __future__ import annotations

import dataclasses

import pytest

from kdef.core.entry import MODULE, Entry, EntryKind, conflicts, render, same_key, values_equal
from kdef.core.errors import InvalidValue


class TestEntryFactories:
    """Test suite for the per-kind factories."""

    def test_bool(self):
        """Test creating a boolean entry."""
        entry = Entry.bool("DEBUG", True)
        assert entry.key == "DEBUG"
        assert entry.value is True
        assert entry.kind is EntryKind.BOOL
        assert entry.line_number is None
        assert entry.source is None
        assert entry.metadata == {}

    def test_tristate_module(self):
        """Test creating a tristate entry set to module."""
        entry = Entry.tristate("MODULE_SUPPORT", MODULE)
        assert entry.value is MODULE
        assert entry.kind is EntryKind.TRISTATE

    def test_string_int_hex(self):
        """Test string, int and hex factories."""
        assert Entry.string("VERSION", "5.4.0").value == "5.4.0"
        assert Entry.int("MAX_THREADS", -32).value == -32
        assert Entry.hex("BASE_ADDR", 0x1000).value == 4096

    def test_comment_and_blank(self):
        """Test keyless entries."""
        comment = Entry.comment("This is a comment")
        assert comment.key is None
        assert comment.value is None
        assert comment.inline_comment == "This is a comment"
        assert comment.kind is EntryKind.COMMENT

        blank = Entry.blank()
        assert blank.key is None
        assert blank.kind is EntryKind.BLANK
        assert not blank.is_config

    def test_options(self):
        """Test that options are stored on the entry."""
        entry = Entry.bool(
            "DEBUG",
            False,
            line_number=3,
            source="defconfig",
            metadata={"disabled_comment": True},
        )
        assert entry.line_number == 3
        assert entry.source == "defconfig"
        assert entry.metadata == {"disabled_comment": True}

    def test_metadata_is_copied(self):
        """Test that the caller's metadata dict is not shared."""
        meta = {"a": 1}
        entry = Entry.string("X", "y", metadata=meta)
        meta["a"] = 2
        assert entry.metadata == {"a": 1}

    @pytest.mark.parametrize(
        "factory,value",
        [
            (Entry.bool, "y"),
            (Entry.bool, 1),
            (Entry.tristate, "m"),
            (Entry.tristate, None),
            (Entry.string, 5),
            (Entry.int, "5"),
            (Entry.int, True),
            (Entry.hex, 1.5),
            (Entry.hex, False),
        ],
    )
    def test_rejects_wrong_type(self, factory, value):
        """Test that factories reject values outside the kind's domain."""
        with pytest.raises(InvalidValue):
            factory("KEY", value)

    def test_invalid_value_is_value_error(self):
        """Test that InvalidValue can be caught as ValueError."""
        with pytest.raises(ValueError):
            Entry.bool("DEBUG", "true")

    def test_hex_accepts_negative_at_construction(self):
        """Test that negative hex values are left to the validator."""
        assert Entry.hex("ADDR", -1).value == -1

    def test_comment_requires_text(self):
        """Test that comment text must be a string."""
        with pytest.raises(InvalidValue):
            Entry.comment(None)

    def test_frozen(self):
        """Test that entries are immutable."""
        entry = Entry.bool("DEBUG", True)
        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.value = False

    def test_hashable(self):
        """Test that entries with metadata can still be hashed."""
        entry = Entry.bool("DEBUG", False, metadata={"disabled_comment": True})
        assert entry in {entry}


class TestRender:
    """Test suite for rendering entries to text."""

    @pytest.mark.parametrize(
        "entry,expected",
        [
            (Entry.bool("DEBUG", True), "CONFIG_DEBUG=y"),
            (Entry.bool("DEBUG", False), "# CONFIG_DEBUG is not set"),
            (Entry.tristate("E1000", True), "CONFIG_E1000=y"),
            (Entry.tristate("E1000", False), "# CONFIG_E1000 is not set"),
            (Entry.tristate("E1000", MODULE), "CONFIG_E1000=m"),
            (Entry.string("VERSION", "5.4.0"), 'CONFIG_VERSION="5.4.0"'),
            (Entry.string("CMD", 'say "hi"'), 'CONFIG_CMD="say "hi""'),
            (Entry.int("MAX_THREADS", 32), "CONFIG_MAX_THREADS=32"),
            (Entry.int("OFFSET", -8), "CONFIG_OFFSET=-8"),
            (Entry.hex("BASE_ADDR", 0x1000), "CONFIG_BASE_ADDR=0x1000"),
            (Entry.hex("MASK", 0xDEADBEEF), "CONFIG_MASK=0xdeadbeef"),
            (Entry.hex("ZERO", 0), "CONFIG_ZERO=0x0"),
            (Entry.comment("This is a comment"), "# This is a comment"),
            (Entry.blank(), ""),
        ],
    )
    def test_render_default_prefix(self, entry, expected):
        """Test rendering with the CONFIG_ prefix."""
        assert render(entry) == expected
        assert entry.render() == expected

    def test_render_custom_prefix(self):
        """Test rendering with a Buildroot prefix."""
        assert render(Entry.bool("PACKAGE_BUSYBOX", True), "BR2_") == "BR2_PACKAGE_BUSYBOX=y"
        assert Entry.bool("X", False).render("BR2_") == "# BR2_X is not set"

    def test_negative_hex_renders_unparseable(self):
        """Test that negative hex values, rejected by the validator, render as 0x-N."""
        assert render(Entry.hex("ADDR", -1)) == "CONFIG_ADDR=0x-1"

    def test_comment_ignores_prefix(self):
        """Test that comments render the same for any prefix."""
        assert render(Entry.comment("hello"), "BR2_") == "# hello"


class TestKeyComparison:
    """Test suite for same_key and conflicts."""

    def test_same_key(self):
        """Test same_key on keyed entries."""
        assert same_key(Entry.bool("A", True), Entry.int("A", 1))
        assert not same_key(Entry.bool("A", True), Entry.bool("B", True))

    def test_same_key_ignores_keyless(self):
        """Test that two keyless entries never share a key."""
        assert not same_key(Entry.blank(), Entry.blank())
        assert not same_key(Entry.comment("a"), Entry.comment("a"))

    def test_conflicts(self):
        """Test conflicts for differing values."""
        assert conflicts(Entry.bool("A", True), Entry.bool("A", False))
        assert not conflicts(Entry.bool("A", True), Entry.bool("A", True))
        assert not conflicts(Entry.bool("A", True), Entry.bool("B", False))

    def test_conflicts_compares_types(self):
        """Test that True and 1 are different values."""
        assert conflicts(Entry.bool("A", True), Entry.int("A", 1))

    def test_conflicts_ignores_metadata(self):
        """Test that provenance does not make values conflict."""
        a = Entry.bool("A", False, metadata={"disabled_comment": True}, line_number=1)
        b = Entry.bool("A", False, source="other")
        assert not conflicts(a, b)


class TestRepr:
    """Test suite for entry repr."""

    def test_repr(self):
        assert repr(Entry.bool("DEBUG", True)) == "<Entry DEBUG=True (bool)>"
        assert repr(Entry.tristate("E1000", MODULE)) == "<Entry E1000=MODULE (tristate)>"
        assert repr(Entry.comment("hi")) == "<Entry comment: 'hi'>"
        assert repr(Entry.blank()) == "<Entry blank>"


class TestValuesEqual:
    def test_same_type_and_value(self):
        assert values_equal(Entry.int("A", 1), Entry.hex("B", 1))
        assert not values_equal(Entry.int("A", 1), Entry.bool("A", True))
        assert values_equal(Entry.blank(), Entry.comment("x")) is True


class TestMetadata:
    """Test suite for entry metadata."""

    def test_read_only(self):
        entry = Entry.bool("A", False, metadata={"disabled_comment": True})
        with pytest.raises(TypeError):
            entry.metadata["disabled_comment"] = False

    def test_copied_from_caller(self):
        raw = {"origin": "code"}
        entry = Entry(key="A", value=True, kind=EntryKind.BOOL, metadata=raw)
        raw["origin"] = "changed"
        assert entry.metadata == {"origin": "code"}

    def test_replace_keeps_equality(self):
        entry = Entry.bool("A", True, metadata={"x": 1})
        assert dataclasses.replace(entry, line_number=3).metadata == {"x": 1}
        assert Entry.bool("A", True, metadata={"x": 1}) == entry
