import logging
import os
from typing import Optional

import requests
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

BREVO_KEY = os.getenv("BREVO_API_KEY")
BREVO_URL = "https://api.brevo.com/v3/smtp/email"
SENDER = {"name": "Rent Manager", "email": os.getenv("MAIL_SENDER", "noreply@rentmanager.app")}


class EmailDeliveryError(Exception):
     pass


def send_password_link_email(to_email: str, link: str, name: Optional[str] = None) -> None:
     """Send the password-set link through Brevo's transactional API."""
     if not BREVO_KEY:
          raise EmailDeliveryError("BREVO_API_KEY is not set")

     greeting = f"Hello {name}," if name else "Hello,"
     try:
          response = requests.post(
               BREVO_URL,
               headers={
                    "api-key": BREVO_KEY,
                    "Content-Type": "application/json",
               },
               json={
                    "sender": SENDER,
                    "to": [{"email": to_email, **({"name": name} if name else {})}],
                    "subject": "Set your Rent Manager password",
                    "htmlContent": f"""
                         <p>{greeting}</p>
                         <p>Use the link below to choose your password and sign in
                         to see your invoices.</p>
                         <p><a href="{link}">Choose a password</a></p>
                         <p>If you did not ask for this, you can ignore this e-mail.</p>
                    """,
               },
               timeout=10,
          )
     except requests.RequestException as e:
          raise EmailDeliveryError(f"Brevo request failed: {e}") from e

     if response.status_code not in (200, 201):
          raise EmailDeliveryError(f"Brevo error: {response.text}")
     logger.info("Password link e-mail queued (status %s)", response.status_code)
