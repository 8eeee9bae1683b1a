"""
MJML Email Templates
All email templates using MJML for responsive, cross-client compatibility
"""

from typing import Any, Callable, Optional

from .config import FRONTEND_URL

# App theme colors - Indigo/Slate color scheme
THEME = {
    "primary": "#4f46e5",
    "primary_dark": "#4338ca",
    "primary_light": "#e0e7ff",
    "background": "#f8fafc",
    "card_bg": "#ffffff",
    "text_primary": "#0f172a",
    "text_secondary": "#334155",
    "text_muted": "#64748b",
    "border": "#e2e8f0",
    "success": "#10b981",
    "warning": "#f59e0b",
    "danger": "#ef4444",
}

STATUS_COLORS = {
    "pending": THEME["warning"],
    "approved": THEME["success"],
    "canceled": THEME["text_muted"],
    "refused": THEME["danger"],
}


def get_base_template(
    title: str,
    preview_text: str,
    content_sections: str,
    cta_url: Optional[str] = None,
    cta_label: Optional[str] = None,
) -> str:
    """Base MJML template wrapper for all emails"""

    cta_section = ""
    if cta_url and cta_label:
        cta_section = f"""
        <mj-section padding="20px 0">
          <mj-column>
            <mj-button
              href="{cta_url}"
              background-color="{THEME['primary']}"
              color="#ffffff"
              font-weight="600"
              border-radius="8px"
              padding="18px 40px"
              font-size="16px">
              {cta_label}
            </mj-button>
          </mj-column>
        </mj-section>
        """

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
            <mj-text font-size="20px" font-weight="700" color="{THEME['primary']}" padding="0 0 24px 0">
              RoomHub
            </mj-text>
            <mj-divider border-color="{THEME['border']}" border-width="1px" padding="0 0 32px 0" />
          </mj-column>
        </mj-section>

        <!-- Main Content -->
        <mj-section background-color="#ffffff" padding="0 40px 48px 40px">
          <mj-column>
            <mj-text font-size="24px" font-weight="600" color="{THEME['text_primary']}" line-height="1.3" padding="0 0 16px 0">
              {title}
            </mj-text>

            {content_sections}
          </mj-column>
        </mj-section>

        {cta_section}

        <!-- Footer -->
        <mj-section padding="32px 20px">
          <mj-column>
            <mj-text align="center" font-size="13px" color="#94a3b8" padding="0">
              You're receiving this because you have an account with RoomHub.
              Manage your notification preferences from your account settings.
            </mj-text>
          </mj-column>
        </mj-section>
      </mj-body>
    </mjml>
    """


def _format_dt(value) -> str:
    if value is None:
        return "-"
    return value.strftime("%A %d %B %Y, %H:%M UTC")


def booking_details_section(booking) -> str:
    """Room, schedule and status block shared by booking emails"""
    if booking is None:
        return ""

    room_name = booking.room.name if getattr(booking, "room", None) else "-"
    guest = booking.user.username if getattr(booking, "user", None) else "-"
    color = STATUS_COLORS.get(booking.status, THEME["text_muted"])

    return f"""
    <mj-table font-size="15px" color="{THEME['text_secondary']}" padding="8px 0 24px 0">
      <tr><td style="padding: 6px 0; color: {THEME['text_muted']};">Room</td><td style="padding: 6px 0;">{room_name}</td></tr>
      <tr><td style="padding: 6px 0; color: {THEME['text_muted']};">Booked by</td><td style="padding: 6px 0;">{guest}</td></tr>
      <tr><td style="padding: 6px 0; color: {THEME['text_muted']};">Start</td><td style="padding: 6px 0;">{_format_dt(booking.start_date)}</td></tr>
      <tr><td style="padding: 6px 0; color: {THEME['text_muted']};">End</td><td style="padding: 6px 0;">{_format_dt(booking.end_date)}</td></tr>
      <tr><td style="padding: 6px 0; color: {THEME['text_muted']};">Status</td><td style="padding: 6px 0; color: {color}; font-weight: 600;">{booking.status}</td></tr>
    </mj-table>
    """


def booking_created_template(context: dict[str, Any]) -> str:
    content = f"""
    <mj-text>
      Your booking has been successfully created. An administrator will review it shortly.
    </mj-text>
    {booking_details_section(context.get("booking"))}
    """
    return get_base_template(
        title="Booking Created",
        preview_text="Your booking has been successfully created",
        content_sections=content,
        cta_url=f"{FRONTEND_URL}/bookings",
        cta_label="View my bookings",
    )


def booking_status_template(status: str) -> Callable[[dict[str, Any]], str]:
    """Template for a booking moved to the given status"""

    def render(context: dict[str, Any]) -> str:
        content = f"""
        <mj-text>
          Your booking status has been changed to <strong>{status}</strong>.
        </mj-text>
        {booking_details_section(context.get("booking"))}
        """
        return get_base_template(
            title=f"Booking {status}",
            preview_text=f"Your booking is now {status}",
            content_sections=content,
            cta_url=f"{FRONTEND_URL}/bookings",
            cta_label="View my bookings",
        )

    return render


def admin_booking_created_template(context: dict[str, Any]) -> str:
    content = f"""
    <mj-text>
      A new booking has been made and is waiting for review.
    </mj-text>
    {booking_details_section(context.get("booking"))}
    """
    return get_base_template(
        title="New Booking Created",
        preview_text="A new booking has been made",
        content_sections=content,
        cta_url=f"{FRONTEND_URL}/admin/bookings",
        cta_label="Review bookings",
    )


def admin_booking_canceled_template(context: dict[str, Any]) -> str:
    content = f"""
    <mj-text>
      A booking was canceled. The room slot is available again.
    </mj-text>
    {booking_details_section(context.get("booking"))}
    """
    return get_base_template(
        title="Booking Canceled",
        preview_text="A booking was canceled",
        content_sections=content,
        cta_url=f"{FRONTEND_URL}/admin/bookings",
        cta_label="Open bookings",
    )


def password_reset_template(context: dict[str, Any]) -> str:
    """Password reset MJML template"""
    content = f"""
    <mj-text>
      We received a request to reset your password.
    </mj-text>
    <mj-text>
      Click the button below to create a new password. This link will expire in 1 hour.
    </mj-text>
    <mj-text font-size="13px" color="{THEME['text_muted']}">
      If you didn't request this, you can safely ignore this email. Your password won't be changed.
    </mj-text>
    """
    return get_base_template(
        title="Reset Your Password",
        preview_text="Reset your RoomHub password",
        content_sections=content,
        cta_url=context["resetLink"],
        cta_label="Reset Password",
    )


EMAIL_TEMPLATES: dict[str, Callable[[dict[str, Any]], str]] = {
    "booking-created": booking_created_template,
    "booking-pending": booking_status_template("pending"),
    "booking-approved": booking_status_template("approved"),
    "booking-canceled": booking_status_template("canceled"),
    "booking-refused": booking_status_template("refused"),
    "admin-booking-created": admin_booking_created_template,
    "admin-booking-canceled": admin_booking_canceled_template,
    "reset-password": password_reset_template,
}


def render_template(name: str, context: Optional[dict[str, Any]] = None) -> str:
    """Render a named template to MJML"""
    try:
        template = EMAIL_TEMPLATES[name]
    except KeyError as e:
        raise ValueError(f"Unknown email template: {name}") from e
    return template(context or {})
