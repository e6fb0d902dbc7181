"""
AWS SES Email Service for job board notifications.

Handles email formatting, template rendering, and AWS SES integration.
Exposes a single `send(to, template_kind, data) -> bool` capability; it never
raises, so callers can treat delivery as best effort.
"""

import logging
from datetime import datetime
from html import escape
from typing import Any, Dict, Tuple
import boto3
from botocore.exceptions import ClientError, BotoCoreError
from app.core.config import settings

logger = logging.getLogger(__name__)

TEMPLATE_NEW_APPLICATION = "new_application"
TEMPLATE_APPLICATION_STATUS = "application_status"
TEMPLATE_WELCOME = "welcome"

# status -> (subject prefix, message shown to the candidate)
STATUS_MESSAGES = {
    "PENDING": ("Application Received", "Your application has been received and is pending review."),
    "REVIEWED": ("Application Update", "Your application is being reviewed by the hiring team."),
    "ACCEPTED": (
        "Congratulations! Application Accepted",
        "Congratulations! Your application has been accepted. The employer will be in touch soon.",
    ),
    "REJECTED": (
        "Application Update",
        "Unfortunately, they have decided to move forward with other candidates at this time.",
    ),
}


class UnknownTemplateError(ValueError):
    """Raised when a template kind has no renderer."""
    pass


class EmailService:
    """
    Service for sending notification emails via AWS SES.

    Supports both development (sandbox) and production modes. When no sender
    address is configured, sends are skipped and logged.
    """

    def __init__(self):
        """Initialize AWS SES client"""
        session_kwargs = {
            'region_name': settings.AWS_REGION,
        }

        # Add credentials if provided (otherwise uses IAM role)
        if settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
            session_kwargs['aws_access_key_id'] = settings.AWS_ACCESS_KEY_ID
            session_kwargs['aws_secret_access_key'] = settings.AWS_SECRET_ACCESS_KEY

        self.ses_client = boto3.client('ses', **session_kwargs)

    @property
    def is_configured(self) -> bool:
        """True when a sender address is set, so sends can reach SES."""
        return bool(settings.AWS_SES_FROM_EMAIL)

    def send(self, to_email: str, template_kind: str, data: Dict[str, Any]) -> bool:
        """
        Render a notification template and send it.

        Args:
            to_email: Recipient email address
            template_kind: One of new_application, application_status, welcome
            data: Template variables

        Returns:
            bool: True if email sent successfully, False otherwise
        """
        if not self.is_configured:
            logger.warning(f"[Email Skipped] No sender configured. To: {to_email}, kind: {template_kind}")
            return False

        try:
            subject, content = self.render(template_kind, data)
        except (UnknownTemplateError, KeyError) as e:
            logger.error(f"Cannot render {template_kind} email for {to_email}: {e}")
            return False

        try:
            response = self.ses_client.send_email(
                Source=f"{settings.AWS_SES_FROM_NAME} <{settings.AWS_SES_FROM_EMAIL}>",
                Destination={'ToAddresses': [to_email]},
                Message={
                    'Subject': {'Data': subject, 'Charset': 'UTF-8'},
                    'Body': {
                        'Html': {'Data': self._wrap_html(content), 'Charset': 'UTF-8'},
                    }
                }
            )

            message_id = response.get('MessageId')
            logger.info(f"[Email Sent] To: {to_email}, Subject: {subject} (MessageId: {message_id})")
            return True

        except ClientError as e:
            error_code = e.response['Error']['Code']
            error_message = e.response['Error']['Message']
            logger.error(f"AWS SES ClientError: {error_code} - {error_message}")
            return False

        except BotoCoreError as e:
            logger.error(f"AWS BotoCoreError: {str(e)}")
            return False

    def render(self, template_kind: str, data: Dict[str, Any]) -> Tuple[str, str]:
        """
        Build (subject, inner HTML) for a template kind.

        Raises:
            UnknownTemplateError: If template_kind is not supported
            KeyError: If a required template variable is missing
        """
        if template_kind == TEMPLATE_NEW_APPLICATION:
            return self._render_new_application(data)
        if template_kind == TEMPLATE_APPLICATION_STATUS:
            return self._render_application_status(data)
        if template_kind == TEMPLATE_WELCOME:
            return self._render_welcome(data)
        raise UnknownTemplateError(f"Unknown email template: {template_kind}")

    def _render_new_application(self, data: Dict[str, Any]) -> Tuple[str, str]:
        job_title = escape(data["job_title"])
        subject = f"New Application for {data['job_title']}"
        content = f"""
<h2>New Application Received!</h2>
<p>Hello {escape(data['employer_name'])},</p>
<p><strong>{escape(data['candidate_name'])}</strong> has applied for the position of <strong>{job_title}</strong>.</p>
<p>Log in to your dashboard to review the application and candidate details.</p>
<a href="{settings.CLIENT_URL}/dashboard/employer" class="button">View Application</a>
"""
        return subject, content

    def _render_application_status(self, data: Dict[str, Any]) -> Tuple[str, str]:
        status = data["status"]
        subject_prefix, message = STATUS_MESSAGES[status]
        subject = f"{subject_prefix}: {data['job_title']}"
        encouragement = "<p>Keep applying - your perfect opportunity is out there!</p>" if status == "REJECTED" else ""
        content = f"""
<h2>Application Status Update</h2>
<p>Hello {escape(data['candidate_name'])},</p>
<p>There's an update on your application for <strong>{escape(data['job_title'])}</strong> at <strong>{escape(data['company_name'])}</strong>.</p>
<p><span class="status-badge status-{status.lower()}">{status}</span></p>
<p>{message}</p>
<a href="{settings.CLIENT_URL}/dashboard/candidate" class="button">View Your Applications</a>
{encouragement}
"""
        return subject, content

    def _render_welcome(self, data: Dict[str, Any]) -> Tuple[str, str]:
        if data["role"] == "EMPLOYER":
            role_message = "You can now post jobs and find the best candidates for your company."
            url = f"{settings.CLIENT_URL}/dashboard/employer"
            button = "Post Your First Job"
        else:
            role_message = "You can now browse and apply for amazing job opportunities."
            url = f"{settings.CLIENT_URL}/jobs"
            button = "Browse Jobs"

        content = f"""
<h2>Welcome to JobBoard!</h2>
<p>Hello {escape(data['first_name'])},</p>
<p>Thank you for joining JobBoard! Your account has been created successfully.</p>
<p>{role_message}</p>
<a href="{url}" class="button">{button}</a>
"""
        return "Welcome to JobBoard!", content

    def _wrap_html(self, content: str) -> str:
        """Wrap rendered content in the shared email layout."""
        return f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>JobBoard Notification</title>
</head>
<body style="margin: 0 auto; padding: 20px; max-width: 600px; font-family: Arial, sans-serif; color: #333333;">
    <div style="background: #667eea; color: #ffffff; padding: 30px; text-align: center; border-radius: 8px 8px 0 0;">
        <h1 style="margin: 0; font-size: 24px;">JobBoard</h1>
    </div>
    <div style="background: #ffffff; padding: 30px; border: 1px solid #e5e7eb; border-top: none;">
        {content}
    </div>
    <div style="background: #f9fafb; padding: 20px; text-align: center; font-size: 12px; color: #6b7280;">
        <p>This is an automated message from JobBoard.</p>
        <p>&copy; {datetime.now().year} JobBoard. All rights reserved.</p>
    </div>
</body>
</html>
"""


# Singleton instance
email_service = EmailService()
