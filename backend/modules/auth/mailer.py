"""
Account mail.

Mail delivery is not wired to a transport; LogMailer records that a
message would have been sent. It never logs links or tokens.
"""

import logging

logger = logging.getLogger(__name__)


class LogMailer:
    """IMailer that writes a log line instead of sending mail."""

    async def send_password_reset(self, email: str, reset_link: str) -> None:
        logger.info(f"Password reset mail queued for {email}")

    async def send_password_reset_confirmation(self, email: str) -> None:
        logger.info(f"Password change confirmation queued for {email}")
