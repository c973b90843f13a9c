"""
Unit tests for the input checks of services.question_service.
"""
import pytest
from devflow.config import settings
from devflow.core.errors import ValidationError
from devflow.schemas.question import GetQuestionsParams, RecommendedParams
from devflow.services.question_service import clean_tag_names, page_offset, require_text


class TestPageOffset:

    def test_first_page_starts_at_zero(self):
        assert page_offset(1, 10) == 0

    def test_offset_is_page_minus_one_times_size(self):
        assert page_offset(3, 20) == 40

    @pytest.mark.parametrize("page,size", [(0, 10), (-1, 10), (1, 0), (2, -5)])
    def test_rejects_non_positive_values(self, page, size):
        with pytest.raises(ValidationError):
            page_offset(page, size)


class TestRequireText:

    def test_strips_whitespace(self):
        assert require_text("  How do I?  ", "title") == "How do I?"

    def test_blank_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            require_text("   ", "content")
        assert exc_info.value.field == "content"

    def test_too_long_is_rejected(self):
        with pytest.raises(ValidationError):
            require_text("x" * 11, "title", max_length=10)


class TestCleanTagNames:

    def test_case_insensitive_repeats_keep_first_spelling(self):
        assert clean_tag_names(["Rust", "rust", "RUST"]) == ["Rust"]

    def test_order_is_preserved(self):
        assert clean_tag_names(["python", " asyncio ", "Python"]) == ["python", "asyncio"]

    def test_empty_list(self):
        assert clean_tag_names([]) == []

    def test_blank_tag_is_rejected(self):
        with pytest.raises(ValidationError):
            clean_tag_names(["python", " "])


class TestPageSizeDefault:

    def test_follows_configured_page_size(self, monkeypatch):
        monkeypatch.setattr(settings, "default_page_size", 3)
        assert GetQuestionsParams().pageSize == 3
        assert RecommendedParams(userId="ext_ada").pageSize == 3

    def test_explicit_page_size_wins(self, monkeypatch):
        monkeypatch.setattr(settings, "default_page_size", 3)
        assert GetQuestionsParams(pageSize=7).pageSize == 7
