"""Dashboard — a single screen with no controller."""

from html import escape


def render(screen):
    screen.enqueue_style("dashboard", "css/dashboard.css")
    name = screen.get("site_name", "CampaignBridge")
    return f"<p>Welcome to {escape(name)}.</p>\n"
