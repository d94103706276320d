# utils/mailer.py
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from config import settings

logger = logging.getLogger(__name__)

def send_email(to: str, subject: str, html: str, sender: str = None):
    """Send an HTML email over SMTP, or log it when no SMTP host is configured."""
    sender = sender or settings.EMAIL_FROM
    if not settings.SMTP_HOST:
        logger.info("Email to %s (%s):\n%s", to, subject, html)
        return

    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = sender
    msg["To"] = to
    msg.attach(MIMEText(html, "html", "utf-8"))

    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=30) as server:
        server.starttls()
        if settings.SMTP_USER:
            server.login(settings.SMTP_USER, settings.SMTP_PASSWORD or "")
        server.sendmail(sender, [to], msg.as_string())
    logger.info("Email '%s' sent to %s", subject, to)
