# tests/test_cancel.py
from __future__ import annotations

import threading

import pytest

from ngramfreq.cancel import CancelToken, check_cancelled
from ngramfreq.errors import NgramFreqError, OperationCancelled


def test_new_token_is_not_cancelled():
    token = CancelToken()
    assert not token.cancelled
    token.check()
    check_cancelled(token)


def test_none_is_never_cancelled():
    check_cancelled(None)


def test_cancel_raises_with_reason():
    token = CancelToken()
    token.cancel("interrupted")

    assert token.cancelled
    with pytest.raises(OperationCancelled, match="interrupted"):
        token.check()
    with pytest.raises(OperationCancelled, match="interrupted"):
        check_cancelled(token)


def test_default_reason():
    token = CancelToken()
    token.cancel()
    with pytest.raises(OperationCancelled, match="operation cancelled"):
        token.check()


def test_cancelled_is_an_ngramfreq_error():
    assert issubclass(OperationCancelled, NgramFreqError)


def test_cancel_from_another_thread():
    token = CancelToken()
    thread = threading.Thread(target=token.cancel)
    thread.start()
    thread.join()
    assert token.cancelled
