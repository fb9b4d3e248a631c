"""
Tests for model identifiers, details and keep-alive settings.
"""

import pytest

from ollamakit import Capability, Int, KeepAlive, ModelDetails, ModelID, String


class TestModelID:
    """Test parsing, equality and pattern matching."""

    @pytest.mark.parametrize(
        "raw, namespace, model, tag",
        [
            ("llama3.2", None, "llama3.2", None),
            ("llama3.2:1b", None, "llama3.2", "1b"),
            ("library/llama3.2", "library", "llama3.2", None),
            ("jmorgan/llava:13b-q4", "jmorgan", "llava", "13b-q4"),
        ],
    )
    def test_parse(self, raw, namespace, model, tag):
        parsed = ModelID.parse(raw)
        assert (parsed.namespace, parsed.model, parsed.tag) == (namespace, model, tag)
        assert parsed.raw == raw
        assert str(parsed) == raw

    def test_case_insensitive_equality(self):
        assert ModelID.parse("Llama3.2:Latest") == ModelID.parse("llama3.2:latest")
        assert hash(ModelID.parse("Llama3.2")) == hash(ModelID.parse("llama3.2"))

    def test_compares_with_strings(self):
        assert ModelID.parse("llama3.2") == "LLAMA3.2"

    def test_ordering(self):
        names = sorted(ModelID.parse(n) for n in ["mistral", "Gemma", "llama3.2"])
        assert [n.raw for n in names] == ["Gemma", "llama3.2", "mistral"]

    def test_matches_wildcards(self):
        pattern = ModelID.parse("llama3.2")
        assert pattern.matches("llama3.2:1b")
        assert pattern.matches("library/llama3.2:latest")
        assert not pattern.matches("mistral")

    def test_matches_tag_and_namespace(self):
        assert ModelID.parse("llama3.2:1b").matches("library/llama3.2:1b")
        assert not ModelID.parse("llama3.2:1b").matches("llama3.2:3b")
        assert not ModelID.parse("custom/llama3.2").matches("library/llama3.2")


class TestModelDetails:
    """Test decoding model details."""

    def test_from_dict(self):
        details = ModelDetails.from_dict(
            {
                "format": "gguf",
                "family": "llama",
                "families": ["llama", "clip"],
                "parameter_size": "7B",
                "quantization_level": "Q4_0",
                "parent_model": "",
            }
        )
        assert details.family == "llama"
        assert details.families == ["llama", "clip"]
        assert details.parent_model is None

    def test_missing_key(self):
        with pytest.raises(KeyError):
            ModelDetails.from_dict({"format": "gguf"})


class TestCapability:
    def test_values(self):
        assert Capability.TOOLS == "tools"
        assert Capability.THINKING == "thinking"
        assert Capability.EMBEDDING == "embedding"


class TestKeepAlive:
    """Test payload values and ordering."""

    def test_default_is_omitted(self):
        assert KeepAlive.DEFAULT.value is None

    def test_none_and_forever(self):
        assert KeepAlive.NONE.value == Int(0)
        assert KeepAlive.FOREVER.value == Int(-1)

    def test_durations(self):
        assert KeepAlive.seconds(10).value == String("10s")
        assert KeepAlive.minutes(5).value == String("5m")
        assert KeepAlive.hours(2).value == String("2h")

    def test_zero_and_negative_durations(self):
        assert KeepAlive.minutes(0).value == Int(0)
        assert KeepAlive.seconds(-5).value == Int(-1)

    def test_ordering(self):
        ordered = [
            KeepAlive.FOREVER,
            KeepAlive.hours(1),
            KeepAlive.DEFAULT,
            KeepAlive.seconds(30),
            KeepAlive.NONE,
            KeepAlive.minutes(5),
        ]
        assert sorted(ordered) == [
            KeepAlive.DEFAULT,
            KeepAlive.NONE,
            KeepAlive.seconds(30),
            KeepAlive.minutes(5),
            KeepAlive.hours(1),
            KeepAlive.FOREVER,
        ]

    def test_str(self):
        assert str(KeepAlive.minutes(5)) == "5m"
        assert str(KeepAlive.FOREVER) == "forever"
