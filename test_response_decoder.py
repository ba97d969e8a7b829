#!/usr/bin/env python3
"""
Tests for the delete/update response decoder
"""

import pytest

from src.workers.appointments_worker import StructuredReply, TextReply, decode_mutation_response


DECODER_CASES = [
    # Structured replies
    {
        "name": "JSON success",
        "body": '{"status": "success", "message": "Appointment removed"}',
        "expected": {"kind": "structured", "succeeded": True, "message": "Appointment removed"},
    },
    {
        "name": "JSON success without message",
        "body": '{"status": "success"}',
        "expected": {"kind": "structured", "succeeded": True, "message": None},
    },
    {
        "name": "JSON failure",
        "body": '{"status": "error", "message": "Appointment not found"}',
        "expected": {"kind": "structured", "succeeded": False, "message": "Appointment not found"},
    },
    {
        "name": "JSON object without status",
        "body": '{"message": "ok?"}',
        "expected": {"kind": "structured", "succeeded": False, "message": "ok?"},
    },
    {
        "name": "Non-string message",
        "body": '{"status": "error", "message": 42}',
        "expected": {"kind": "structured", "succeeded": False, "message": "42"},
    },
    # Opaque text replies
    {
        "name": "Plain text",
        "body": "Removed",
        "expected": {"kind": "text", "succeeded": True, "message": "Removed"},
    },
    {
        "name": "Empty body",
        "body": "",
        "expected": {"kind": "text", "succeeded": True, "message": ""},
    },
    {
        "name": "JSON string literal",
        "body": '"Removed"',
        "expected": {"kind": "text", "succeeded": True, "message": '"Removed"'},
    },
    {
        "name": "JSON array",
        "body": "[1, 2]",
        "expected": {"kind": "text", "succeeded": True, "message": "[1, 2]"},
    },
]


@pytest.mark.parametrize("case", DECODER_CASES, ids=[c["name"] for c in DECODER_CASES])
def test_decode_mutation_response(case):
    reply = decode_mutation_response(case["body"])

    assert reply.kind == case["expected"]["kind"]
    assert reply.succeeded is case["expected"]["succeeded"]
    assert reply.message == case["expected"]["message"]


def test_reply_types():
    assert isinstance(decode_mutation_response('{"status": "success"}'), StructuredReply)
    assert isinstance(decode_mutation_response("Deleted"), TextReply)
