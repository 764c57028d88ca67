"""Mailchimp tab — API credentials and connection status."""

from html import escape


def render(screen):
    screen.enqueue_script("mailchimp", "js/mailchimp.js", ("jquery",))
    screen.localize_script("mailchimp", "cbMailchimp", {"connected": screen.get("mailchimp_connected")})

    status = screen.get("integrations", {}).get("mailchimp", {}).get("status", "Unknown")
    nonce = screen.nonce_field("save_settings") if screen.csrf_enabled else ""
    audience = escape(str(screen.get("mailchimp_audience", "")))
    return (
        f"<p>Status: <strong>{escape(status)}</strong></p>\n"
        '<form method="post">\n'
        f"{nonce}"
        '<p><label for="mailchimp_api_key">API key</label> '
        '<input id="mailchimp_api_key" name="mailchimp_api_key" type="password"></p>\n'
        f'<p><label for="mailchimp_audience">Audience</label> '
        f'<input id="mailchimp_audience" name="mailchimp_audience" value="{audience}"></p>\n'
        '<p><button type="submit">Save</button></p>\n'
        "</form>\n"
    )
