"""
MJML Email Templates
Admin notification emails, compiled to HTML with mjml before sending
"""

from html import escape

# App theme colors - Green/Slate color scheme
THEME = {
    "primary": "#16a34a",
    "primary_light": "#dcfce7",
    "background": "#f8fafc",
    "card_bg": "#f3f4f6",
    "text_primary": "#0f172a",
    "text_secondary": "#334155",
    "text_muted": "#64748b",
    "border": "#e2e8f0",
}


def get_base_template(title: str, preview_text: str, content_sections: str) -> str:
    """Base MJML template wrapper for all emails"""
    return f"""
    <mjml>
      <mj-head>
        <mj-title>{title}</mj-title>
        <mj-preview>{preview_text}</mj-preview>
        <mj-attributes>
          <mj-all font-family="-apple-system, BlinkMacSystemFont, 'Segoe UI', 'Helvetica Neue', Arial, sans-serif" />
          <mj-text font-size="16px" line-height="1.6" color="{THEME['text_secondary']}" />
        </mj-attributes>
      </mj-head>
      <mj-body background-color="{THEME['background']}">
        <mj-section background-color="#ffffff" padding="32px 40px 0 40px">
          <mj-column>
            <mj-text font-size="24px" font-weight="600" color="{THEME['primary']}" line-height="1.3" padding="0 0 16px 0">
              {title}
            </mj-text>
            <mj-divider border-color="{THEME['border']}" border-width="1px" padding="0 0 16px 0" />
          </mj-column>
        </mj-section>

        <!-- Main Content -->
        <mj-section background-color="#ffffff" padding="0 40px 40px 40px">
          <mj-column>
            {content_sections}
          </mj-column>
        </mj-section>

        <!-- Footer -->
        <mj-section padding="24px 20px">
          <mj-column>
            <mj-text align="center" font-size="13px" color="#94a3b8" padding="0">
              eBhangar - scrap pickup at your doorstep
            </mj-text>
          </mj-column>
        </mj-section>
      </mj-body>
    </mjml>
    """


def booking_created_template(summary: dict) -> str:
    """New booking notification for the admin mailbox"""
    item_rows = "".join(
        f"""
        <tr>
          <td style="padding: 4px 0;">{escape(str(item['category_name']))}</td>
          <td style="padding: 4px 0; text-align: center;">{item['quantity']}</td>
          <td style="padding: 4px 0; text-align: right;">&#8377;{escape(str(item['value']))}</td>
        </tr>
        """
        for item in summary["items"]
    )

    content = f"""
    <mj-text font-size="18px" font-weight="600" color="{THEME['text_primary']}" padding="0 0 8px 0">
      Customer Details
    </mj-text>
    <mj-text container-background-color="{THEME['card_bg']}" padding="16px">
      <strong>Name:</strong> {escape(summary['customer_name'])}<br/>
      <strong>Phone:</strong> {escape(summary['customer_phone'])}<br/>
      <strong>Address:</strong> {escape(summary['customer_address'])}
    </mj-text>

    <mj-text font-size="18px" font-weight="600" color="{THEME['text_primary']}" padding="24px 0 8px 0">
      Items
    </mj-text>
    <mj-table container-background-color="{THEME['card_bg']}" padding="16px">
      <tr style="border-bottom: 1px solid {THEME['border']}; text-align: left;">
        <th>Category</th>
        <th style="text-align: center;">Qty</th>
        <th style="text-align: right;">Value</th>
      </tr>
      {item_rows}
    </mj-table>

    <mj-text align="center" color="#ffffff" container-background-color="{THEME['primary']}" font-size="18px" font-weight="600" padding="16px">
      Total Estimated Value: &#8377;{escape(str(summary['total_value']))}
    </mj-text>

    <mj-text padding="24px 0 0 0">
      <strong>Action Required:</strong> Please assign a vendor to this booking.
    </mj-text>
    <mj-text font-size="12px" color="{THEME['text_muted']}">
      Booking reference: {escape(summary['reference_id'])}
    </mj-text>
    """

    return get_base_template(
        title="New Booking Received",
        preview_text=f"{escape(summary['customer_name'])} booked a pickup worth {escape(str(summary['total_value']))}",
        content_sections=content,
    )
