import os
import logging
from datetime import datetime
from typing import Optional
from jinja2 import Environment, FileSystemLoader, select_autoescape
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail, To

from app.core.config import settings
from app.utils.template import strip_html

logger = logging.getLogger(__name__)

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), '..', 'templates')

class EmailService:
    """
    Transactional email over SendGrid.

    Credentials are passed in at construction and never re-read.
    """
    _template_env = None

    def __init__(self, api_key: Optional[str], from_email: str, from_name: Optional[str] = None, company_name: str = "OwnItRight"):
        self.api_key = api_key
        self.from_email = from_email
        self.from_name = from_name
        self.company_name = company_name

    @classmethod
    def _get_template_env(cls):
        """
        Initialize Jinja2 template environment with inheritance support
        """
        if cls._template_env is None:
            cls._template_env = Environment(
                loader=FileSystemLoader(TEMPLATE_DIR),
                autoescape=select_autoescape(['html']),
                enable_async=False
            )
        return cls._template_env

    def render_template(self, template_name: str, context: dict) -> str:
        """
        Render an email template

        :param template_name: Name of the template file
        :param context: Dictionary of template variables
        :return: Rendered HTML template
        """
        default_context = {
            'company_name': self.company_name,
            'current_year': datetime.now().year,
            **context
        }
        template = self._get_template_env().get_template(template_name)
        return template.render(**default_context)

    @property
    def sender(self) -> str:
        if self.from_name:
            return f"{self.from_name} <{self.from_email}>"
        return self.from_email

    def send_email(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        text_content: Optional[str] = None,
    ) -> bool:
        """Send one email. Never raises; returns False when nothing was delivered."""
        if not self.api_key:
            logger.warning(f"SendGrid API key not configured, skipping email to {to_email}")
            return False

        try:
            message = Mail(
                from_email=self.sender,
                to_emails=To(to_email),
                subject=subject,
                html_content=html_content,
                plain_text_content=text_content or strip_html(html_content)
            )

            sendgrid_client = SendGridAPIClient(self.api_key)
            response = sendgrid_client.send(message)

            if response.status_code not in [200, 201, 202]:
                logger.error(f"SendGrid error: {response.status_code} - {response.body}")
                return False

            logger.info(f"Email sent to {to_email}: {subject}")
            return True

        except Exception as e:
            logger.error(f"SendGrid email error sending to {to_email}: {e}")
            return False

email_service = EmailService(
    api_key=settings.SENDGRID_API_KEY,
    from_email=settings.EMAILS_FROM_EMAIL,
    from_name=settings.EMAILS_FROM_NAME,
    company_name=settings.APP_NAME,
)
