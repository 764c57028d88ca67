"""General tab — sender identity."""

from html import escape


def render(screen):
    nonce = screen.nonce_field("save_settings") if screen.csrf_enabled else ""
    screen.write('<form method="post">\n')
    screen.write(str(nonce))
    for field, label in (
        ("from_name", "From name"),
        ("from_email", "From email"),
        ("reply_to", "Reply-to"),
    ):
        value = escape(str(screen.get(field, "")))
        screen.write(
            f'<p><label for="{field}">{label}</label> '
            f'<input id="{field}" name="{field}" value="{value}"></p>\n'
        )
    screen.write('<p><button type="submit">Save</button></p>\n</form>\n')
