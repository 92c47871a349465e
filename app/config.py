import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./ebhangar.db")

# CORS
ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "https://ebhangar-app.onrender.com,http://localhost:5173",
).split(",")

# Booking reference ids look like EBH-MUM-1000, EBH-MUM-1001, ...
BOOKING_REFERENCE_PREFIX = os.getenv("BOOKING_REFERENCE_PREFIX", "EBH-MUM-")
BOOKING_REFERENCE_START = int(os.getenv("BOOKING_REFERENCE_START", "1000"))
INVOICE_NUMBER_PREFIX = os.getenv("INVOICE_NUMBER_PREFIX", "INV-")

# Insert the standard scrap categories on startup when the table is empty
SEED_CATEGORIES_ON_STARTUP = os.getenv("SEED_CATEGORIES_ON_STARTUP", "true").lower() == "true"

# Booking notifications go to the admin mailbox
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@ebhangar.com")

# SMTP (primary transport, disabled unless credentials are set)
SMTP_HOST = os.getenv("SMTP_HOST", "smtp.gmail.com")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USER = os.getenv("SMTP_USER")
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD")

# Resend Email Configuration (fallback)
RESEND_API_KEY = os.getenv("RESEND_API_KEY")
EMAIL_FROM_ADDRESS = os.getenv("EMAIL_FROM_ADDRESS", "eBhangar Notifications <noreply@ebhangar.com>")
