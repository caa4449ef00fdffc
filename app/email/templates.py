"""
Email templates for PyTrivia.

Each template function returns (subject, html_body, text_body).
"""
from __future__ import annotations

from html import escape

APP_NAME = "PyTrivia"
ACCENT = "#3776AB"
TEXT_PRIMARY = "#1F2328"
TEXT_SECONDARY = "#59636E"


def _base_layout(content: str) -> str:
    """Wrap content in the base email layout."""
    return f"""\
<!DOCTYPE html>
<html lang="en">
<head><meta charset="UTF-8"><title>{APP_NAME}</title></head>
<body style="margin: 0; padding: 32px; font-family: -apple-system, 'Segoe UI', Roboto, sans-serif; color: {TEXT_PRIMARY};">
    <h2 style="color: {ACCENT}; margin: 0 0 24px 0;">{APP_NAME}</h2>
    {content}
    <p style="color: {TEXT_SECONDARY}; font-size: 12px; margin-top: 32px;">
        If you didn't expect this email, you can safely ignore it.
    </p>
</body>
</html>"""


def _expiry_text(expires_minutes: int) -> str:
    return "1 hour" if expires_minutes == 60 else f"{expires_minutes} minutes"


def password_reset(reset_url: str, username: str | None = None, expires_minutes: int = 60) -> tuple[str, str, str]:
    """
    Password reset email.

    Returns:
        (subject, html_body, text_body)
    """
    subject = "Reset your PyTrivia password"
    greeting = f"Hi {username}," if username else "Hi,"
    expiry = _expiry_text(expires_minutes)
    content = f"""\
<p>{escape(greeting)}</p>
<p>We received a request to reset your password. Use the link below to choose a new one.</p>
<p><a href="{escape(reset_url)}" style="color: {ACCENT};">Reset password</a></p>
<p style="color: {TEXT_SECONDARY};">This link expires in <strong>{expiry}</strong>.
If you didn't request this, your password will remain unchanged.</p>"""
    text_body = (
        f"{greeting}\n\n"
        f"We received a request to reset your password.\n\n"
        f"Open this link to set a new password:\n\n{reset_url}\n\n"
        f"This link expires in {expiry}.\n\n"
        f"If you didn't request a password reset, please ignore this email.\n\n"
        f"-- The {APP_NAME} Team"
    )
    return subject, _base_layout(content), text_body


def password_changed(username: str | None = None) -> tuple[str, str, str]:
    """Password changed notification."""
    subject = "Your PyTrivia password was changed"
    greeting = f"Hi {username}," if username else "Hi,"
    content = f"""\
<p>{escape(greeting)}</p>
<p>Your password was just changed. If this wasn't you, request a new reset link right away.</p>"""
    text_body = (
        f"{greeting}\n\n"
        f"Your password was just changed. If this wasn't you, request a new reset link right away.\n\n"
        f"-- The {APP_NAME} Team"
    )
    return subject, _base_layout(content), text_body
