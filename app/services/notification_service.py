"""
Notification Service
Best-effort admin notifications, run as background tasks after the response is sent
"""

import logging

from ..email_service import send_booking_created_notification

logger = logging.getLogger(__name__)


def notify_booking_created(summary: dict) -> bool:
    """
    Email the admin about a new booking.

    Delivery failures are logged and never reach the customer; the booking is
    already committed when this runs. Kept synchronous so BackgroundTasks runs
    it in the threadpool; the SMTP and Resend clients block.

    Returns:
        True when an email was handed to a transport
    """
    reference_id = summary.get("reference_id")
    try:
        logger.info(f"📧 Sending booking notification for {reference_id}")
        response = send_booking_created_notification(summary)
    except Exception as e:
        logger.error(f"❌ Failed to send booking notification for {reference_id}: {e}")
        return False

    if response is None:
        logger.info(
            f"📭 Booking {reference_id} notification skipped: "
            f"customer {summary.get('customer_name')}, total ₹{summary.get('total_value')}"
        )
        return False

    logger.info(f"✅ Booking notification sent for {reference_id}")
    return True
