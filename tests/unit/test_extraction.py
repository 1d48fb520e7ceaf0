from app.analysis.extraction import extract_text


class TestSectionOrder:
    def test_content_then_pairs_then_entities(self) -> None:
        payload = {
            "content": "Hello",
            "keyValuePairs": [{"key": {"content": "Name"}, "value": {"content": "Bob"}}],
            "entities": [{"category": "Person", "content": "Bob"}],
        }

        text = extract_text(payload)

        hello = text.index("Hello")
        pair = text.index("Name: Bob")
        entity = text.index("Person: Bob")
        assert hello < pair < entity

    def test_is_idempotent(self) -> None:
        payload = {
            "content": "Hello",
            "keyValuePairs": [{"key": {"content": "Name"}, "value": {"content": "Bob"}}],
        }
        assert extract_text(payload) == extract_text(payload)

    def test_section_headers(self) -> None:
        text = extract_text({"content": "x", "keyValuePairs": [], "entities": []})
        assert text.splitlines() == [
            "=== Document Content ===",
            "x",
            "",
            "=== Key-Value Pairs ===",
            "",
            "=== Entities ===",
        ]


class TestMissingSections:
    def test_empty_payload_gives_empty_text(self) -> None:
        assert extract_text({}) == ""

    def test_only_entities(self) -> None:
        text = extract_text({"entities": [{"category": "Date", "content": "2024-01-01"}]})
        assert "Date: 2024-01-01" in text
        assert "Document Content" not in text
        assert "Key-Value Pairs" not in text

    def test_non_list_sections_are_skipped(self) -> None:
        text = extract_text({"content": "c", "keyValuePairs": "oops", "entities": None})
        assert "Key-Value Pairs" not in text
        assert "Entities" not in text


class TestMalformedItems:
    def test_pair_without_value_has_empty_value(self) -> None:
        text = extract_text({"keyValuePairs": [{"key": {"content": "Total"}}]})
        assert "Total: " in text.splitlines()

    def test_pair_without_key_content_is_skipped(self) -> None:
        text = extract_text(
            {
                "keyValuePairs": [
                    {"key": {}, "value": {"content": "lost"}},
                    "garbage",
                    {"key": {"content": "Kept"}, "value": {"content": "yes"}},
                ]
            }
        )
        assert "lost" not in text
        assert "Kept: yes" in text

    def test_entity_missing_field_is_skipped(self) -> None:
        text = extract_text(
            {
                "entities": [
                    {"category": "Person"},
                    {"content": "orphan"},
                    {"category": "Org", "content": "Acme"},
                ]
            }
        )
        assert "orphan" not in text
        assert "Org: Acme" in text
