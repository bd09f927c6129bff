"""
tests/test_status.py
~~~~~~~~~~~~~~~~~~~~
Tests for sampras.status — the meta.code decision table.
"""

from __future__ import annotations

import pytest

from sampras.status import ResultStatus, classify_result, meta_code


class TestClassifyResult:
    def test_200_is_ready(self):
        assert classify_result({"meta": {"code": 200}}) is ResultStatus.READY

    def test_5031_is_pending(self):
        assert classify_result({"meta": {"code": 5031}}) is ResultStatus.PENDING

    @pytest.mark.parametrize("code", [0, 201, 400, 500, 5030, 5032])
    def test_other_codes_fail(self, code):
        assert classify_result({"meta": {"code": code}}) is ResultStatus.FAILED

    @pytest.mark.parametrize(
        "response",
        [None, [], "oops", {}, {"meta": None}, {"meta": {}}, {"meta": {"code": "200"}}],
    )
    def test_wrong_shape_fails(self, response):
        assert classify_result(response) is ResultStatus.FAILED


class TestMetaCode:
    def test_reads_code(self):
        assert meta_code({"meta": {"code": 5031}}) == 5031

    def test_bool_is_not_a_code(self):
        assert meta_code({"meta": {"code": True}}) is None
