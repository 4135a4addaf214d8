import smtplib
from flask import current_app
from flask_mail import Message
from coursehub.extensions import mail
from coursehub.exceptions import MailDeliveryError


def send_email(to, subject, html, body=None):
    """Send an email through Flask-Mail and return its message id."""

    msg = Message(
        subject=subject,
        recipients=[to] if isinstance(to, str) else to,
        sender=current_app.config.get("MAIL_DEFAULT_SENDER"),
    )
    msg.html = html
    if body:
        msg.body = body

    try:
        mail.send(msg)
    except (smtplib.SMTPException, OSError) as e:
        current_app.logger.error(f"Failed to send email to {to}: {e}")
        raise MailDeliveryError(context={"to": to, "subject": subject}) from e

    current_app.logger.info(f"Email sent successfully to {to}")
    return msg.msgId
