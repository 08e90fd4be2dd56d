"""Tests for JSON extraction from raw model replies."""

import json

import pytest

from jobfit.infra.json_repair import extract_json_block, repair_json, strip_code_fence


class TestStripCodeFence:
    @pytest.mark.parametrize(
        "raw",
        [
            '```json\n{"a": 1}\n```',
            '```\n{"a": 1}\n```',
            '  ```JSON\n{"a": 1}```  ',
        ],
    )
    def test_removes_fence(self, raw: str) -> None:
        assert strip_code_fence(raw) == '{"a": 1}'

    def test_unfenced_text_only_trimmed(self) -> None:
        assert strip_code_fence('  {"a": 1}\n') == '{"a": 1}'


class TestExtractJsonBlock:
    def test_skips_leading_prose(self) -> None:
        text = 'Here is the result: {"a": {"b": [1, 2]}} Hope that helps!'

        assert extract_json_block(text) == '{"a": {"b": [1, 2]}}'

    def test_braces_inside_strings_ignored(self) -> None:
        text = '{"a": "closing } brace", "b": "quote \\" }"} trailing'

        assert json.loads(extract_json_block(text)) == {"a": "closing } brace", "b": 'quote " }'}

    def test_array_payload(self) -> None:
        assert extract_json_block("result: [1, [2, 3]] done") == "[1, [2, 3]]"

    def test_unbalanced_block_runs_to_end(self) -> None:
        assert extract_json_block('ok {"a": [1, 2') == '{"a": [1, 2'

    def test_no_json_returns_input(self) -> None:
        assert extract_json_block("no json here") == "no json here"


class TestRepairJson:
    def test_fenced_reply_with_prose(self) -> None:
        raw = 'Sure!\n```json\n{"skills": ["Go", "Rust"]}\n```'

        assert json.loads(repair_json(raw)) == {"skills": ["Go", "Rust"]}

    def test_invalid_escape_dropped(self) -> None:
        raw = '{"bullet": "Cut latency \\- 40%"}'

        assert json.loads(repair_json(raw)) == {"bullet": "Cut latency - 40%"}

    def test_valid_escapes_preserved(self) -> None:
        raw = '{"text": "line1\\nline2 \\"quoted\\" C:\\\\path \\u00e9"}'

        assert json.loads(repair_json(raw)) == {"text": 'line1\nline2 "quoted" C:\\path \u00e9'}

    def test_escaped_backslash_before_letter_kept(self) -> None:
        # \\- is an escaped backslash followed by '-', not an escaped '-'
        raw = '{"path": "a\\\\-b"}'

        assert json.loads(repair_json(raw)) == {"path": "a\\-b"}
