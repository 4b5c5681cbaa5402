"""Tests for recognizing credential failures in git push output."""

import pytest

from refbot.gateway.git.real import is_auth_failure


@pytest.mark.parametrize(
    "stderr",
    [
        "remote: Invalid username or password.\n"
        "fatal: Authentication failed for 'https://github.com/refbot/project.git/'",
        "fatal: could not read Username for 'https://github.com': terminal prompts disabled",
        "remote: Permission to owner/project.git denied to refbot.\n"
        "fatal: unable to access 'https://github.com/owner/project.git/': "
        "The requested URL returned error: 403",
    ],
)
def test_detects_auth_failures(stderr: str) -> None:
    assert is_auth_failure(stderr)


@pytest.mark.parametrize(
    "stderr",
    [
        "",
        " ! [rejected]        task -> task (non-fast-forward)",
        "fatal: unable to access 'https://github.com/x.git/': Could not resolve host: github.com",
    ],
)
def test_other_failures_are_not_auth_failures(stderr: str) -> None:
    assert not is_auth_failure(stderr)
