"""Tests for the password hashing command."""

import re
from unittest.mock import patch

from opsdesk.core.security import verify_password
from opsdesk.scripts import hashpassword


def _prompter(*answers):
    replies = iter(answers)
    return lambda _prompt: next(replies)


class TestPromptForPassword:
    def test_accepts_matching_password(self) -> None:
        assert hashpassword.prompt_for_password(_prompter("longenough", "longenough")) == "longenough"

    def test_retries_short_and_mismatched(self, capsys) -> None:
        prompt = _prompter("short", "longenough", "different", "longenough", "longenough")

        assert hashpassword.prompt_for_password(prompt) == "longenough"
        out = capsys.readouterr().out
        assert "at least 8 characters" in out
        assert "don't match" in out


class TestMain:
    def test_prints_verifiable_hash(self, capsys) -> None:
        with patch.object(hashpassword, "prompt_for_password", lambda: "s3cret-pass"):
            assert hashpassword.main() == 0

        match = re.search(r"([0-9a-f]{32}:[0-9a-f]{64})", capsys.readouterr().out)
        assert match
        assert verify_password("s3cret-pass", match.group(1))

    def test_ctrl_c_exits_1(self, capsys) -> None:
        def interrupted():
            raise KeyboardInterrupt

        with patch.object(hashpassword, "prompt_for_password", interrupted):
            assert hashpassword.main() == 1

        assert "Cancelled" in capsys.readouterr().out
