"""Share invitation email."""

import logging

from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


def send_share_invitation(
    *,
    recipient_email: str,
    sender_email: str,
    note_title: str,
    share_url: str,
    permission: str
) -> bool:
    """
    Email the recipient a link to accept a shared note.

    Delivery failures are logged and reported as False; sharing itself
    never depends on the mail server.
    """
    access = 'edit' if permission == 'WRITE' else 'view'
    subject = f'{sender_email} shared a note with you'
    message = (
        f'{sender_email} shared the note "{note_title}" with you '
        f'and you can {access} it.\n\n'
        f'Open this link to accept: {share_url}'
    )

    try:
        send_mail(
            subject=subject,
            message=message,
            from_email=getattr(settings, 'DEFAULT_FROM_EMAIL', None),
            recipient_list=[recipient_email],
            fail_silently=False,
        )
    except Exception:
        logger.exception("Failed to send share invitation to %s", recipient_email)
        return False

    return True
