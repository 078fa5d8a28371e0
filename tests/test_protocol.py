"""Tests for completion predicates."""

from lib.amino.protocol import (
    READY_MARKER,
    Status,
    classify_login,
    classify_response,
    expect_literal,
    expect_login_prompt,
)


def test_login_failure_phrase() -> None:
    """Test that a rejected login is classified as failed."""
    verdict = classify_login("\r\nLogin incorrect\r\nAMINET login: ")
    assert verdict.status is Status.FAIL
    assert verdict.reason == "Login incorrect"


def test_login_failure_wins_over_prompt() -> None:
    """Test failure phrase checked before the ready marker."""
    verdict = classify_login(f"Login incorrect\r\n{READY_MARKER}")
    assert verdict.status is Status.FAIL


def test_login_success() -> None:
    """Test banner with the ready marker."""
    verdict = classify_login(f"\r\nBusyBox v1.22.1\r\n{READY_MARKER}")
    assert verdict.status is Status.SUCCESS
    assert verdict.done


def test_login_needs_more_data() -> None:
    """Test partial banner."""
    verdict = classify_login("\r\nBusyBox v1.22.1 built-in")
    assert verdict.status is Status.CONTINUE
    assert not verdict.done


def test_response_complete() -> None:
    """Test prompt completes a response."""
    assert classify_response(f"uname -r\r\n3.10.79\r\n{READY_MARKER}").status is Status.SUCCESS


def test_response_complete_with_crlf_prompt() -> None:
    """Test prompt whose line ending was rewritten by the terminal."""
    assert classify_response("uname -r\r\n3.10.79\r\n[root@AMINET]# \r\n").status is Status.SUCCESS


def test_response_not_found_wins_over_prompt() -> None:
    """Test not-found report fails even with the prompt present."""
    verdict = classify_response(f"foo\r\n-sh: foo: not found\r\n{READY_MARKER}")
    assert verdict.status is Status.FAIL


def test_response_incomplete() -> None:
    """Test output without a prompt yet."""
    assert classify_response("top -bn1\r\nMem: 180176K used").status is Status.CONTINUE


def test_expect_literal() -> None:
    """Test literal predicate."""
    classify = expect_literal("Password: ")
    assert classify("root\r\nPass").status is Status.CONTINUE
    assert classify("root\r\nPassword: ").status is Status.SUCCESS


def test_expect_login_prompt_reports_rejection() -> None:
    """Test handshake predicate fails on a rejection before its prompt."""
    classify = expect_login_prompt("Password: ")
    assert classify("root\r\n").status is Status.CONTINUE
    assert classify("root\r\nPassword: ").status is Status.SUCCESS

    verdict = classify("root\r\nLogin incorrect\r\nAMINET login: ")
    assert verdict.status is Status.FAIL
    assert verdict.reason == "Login incorrect"
