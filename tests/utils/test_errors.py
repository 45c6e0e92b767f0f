"""Unit Tests for the analysis error taxonomy

Tests cover:
1. Each AnalysisError kind carries its code and step
2. AnalysisTimeoutError takes its step per instance
3. The message is what str() renders
4. EmptyResponseError stays outside the AnalysisError hierarchy
"""

import pytest

from reddit_psychiatrist.utils.errors import (
    ANALYSIS_TIMEOUT,
    INTEREST_EXTRACTION_FAILED,
    RETRIEVAL_FAILED,
    STEP_EXTRACTING_INTERESTS,
    STEP_EXTRACTING_SUMMARY,
    STEP_FETCHING,
    SUMMARY_GENERATION_FAILED,
    AnalysisError,
    AnalysisTimeoutError,
    EmptyResponseError,
    InterestExtractionFailedError,
    RetrievalFailedError,
    SummaryGenerationFailedError,
)


class TestAnalysisErrorKinds:
    """Test code and step attributes of each error kind."""

    @pytest.mark.parametrize('error_cls,code,step', [
        (RetrievalFailedError, RETRIEVAL_FAILED, STEP_FETCHING),
        (InterestExtractionFailedError, INTEREST_EXTRACTION_FAILED, STEP_EXTRACTING_INTERESTS),
        (SummaryGenerationFailedError, SUMMARY_GENERATION_FAILED, STEP_EXTRACTING_SUMMARY),
    ])
    def test_fixed_code_and_step(self, error_cls, code, step):
        error = error_cls("something broke", username="spez")

        assert isinstance(error, AnalysisError)
        assert error.code == code
        assert error.step == step
        assert error.username == "spez"
        assert str(error) == "something broke"

    @pytest.mark.parametrize('step', [STEP_FETCHING, STEP_EXTRACTING_INTERESTS, STEP_EXTRACTING_SUMMARY])
    def test_timeout_step_set_per_instance(self, step):
        error = AnalysisTimeoutError("timed out", step=step)

        assert error.code == ANALYSIS_TIMEOUT
        assert error.step == step
        assert error.username is None

    def test_timeout_step_does_not_leak_to_class(self):
        AnalysisTimeoutError("timed out", step=STEP_FETCHING)

        assert AnalysisTimeoutError("timed out", step=STEP_EXTRACTING_SUMMARY).step == STEP_EXTRACTING_SUMMARY

    def test_step_constants_distinct(self):
        assert len({STEP_FETCHING, STEP_EXTRACTING_INTERESTS, STEP_EXTRACTING_SUMMARY}) == 3


class TestEmptyResponseError:
    """Test the parser-level empty response error."""

    def test_default_message(self):
        assert str(EmptyResponseError()) == "no response choices returned"

    def test_not_an_analysis_error(self):
        """The orchestrator must wrap it before it reaches a caller."""
        assert not isinstance(EmptyResponseError(), AnalysisError)
