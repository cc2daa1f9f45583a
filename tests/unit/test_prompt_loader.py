from pathlib import Path

import pytest

from docsummary.summarization.exceptions import SummarizationError
from docsummary.summarization.prompt_loader import load_prompt_template


class TestLoadPromptTemplate:
    def test_bundled_template_has_placeholders(self) -> None:
        template = load_prompt_template()

        assert "{length_description}" in template
        assert "{document_text}" in template

    def test_bundled_template_formats(self) -> None:
        prompt = load_prompt_template().format(
            length_description="3-4 paragraphs", document_text="Body {with braces}"
        )

        assert "Length: 3-4 paragraphs" in prompt
        assert "Body {with braces}" in prompt

    def test_loads_custom_path(self, tmp_path: Path) -> None:
        path = tmp_path / "prompt.txt"
        path.write_text("Summarize in {length_description}: {document_text}", encoding="utf-8")

        assert load_prompt_template(path).startswith("Summarize in")

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(SummarizationError, match="Failed to load prompt template"):
            load_prompt_template(tmp_path / "missing.txt")
