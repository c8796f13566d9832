"""
HTML email templates.

Every template extends the same layout; blocks receive the variables passed
to render_email().
"""

from jinja2 import Environment, DictLoader, select_autoescape

LAYOUT = """<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ app_name }}</title>
    <style>
        body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; margin: 0; }
        .container { max-width: 600px; margin: 0 auto; padding: 20px; }
        .header { background: #1f7a4d; color: white; padding: 20px; text-align: center; }
        .content { padding: 30px 20px; background: #f9f9f9; }
        .code { font-size: 32px; font-weight: bold; letter-spacing: 8px; text-align: center; padding: 16px; background: #fff; border: 1px dashed #1f7a4d; }
        .button { display: inline-block; padding: 12px 24px; background: #1f7a4d; color: white; text-decoration: none; border-radius: 4px; }
        .footer { padding: 20px; text-align: center; font-size: 12px; color: #666; }
    </style>
</head>
<body>
    <div class="container">
        <div class="header"><h1>{{ app_name }}</h1></div>
        <div class="content">
            {% block content %}{% endblock %}
        </div>
        <div class="footer">&copy; {{ app_name }}. This is an automated message, please do not reply.</div>
    </div>
</body>
</html>
"""

VERIFICATION = """{% extends "layout.html" %}{% block content %}
<p>Hello {{ name or "there" }},</p>
<p>Use the code below to verify your email address:</p>
<div class="code">{{ code }}</div>
<p>This code expires in <strong>{{ expires_in }} minutes</strong>. If you did not create an account, you can ignore this email.</p>
{% endblock %}"""

PASSWORD_RESET = """{% extends "layout.html" %}{% block content %}
<p>Hello {{ name or "there" }},</p>
<p>We received a request to reset your password. Use this code to choose a new one:</p>
<div class="code">{{ code }}</div>
<p>This code expires in <strong>{{ expires_in }} minutes</strong> and can only be used once. If you did not request a reset, no action is needed.</p>
{% endblock %}"""

INVITATION = """{% extends "layout.html" %}{% block content %}
<p>Hello {{ name or "there" }},</p>
<p><strong>{{ inviter_name }}</strong> invited you to join <strong>{{ restaurant_name }}</strong>.</p>
<p style="text-align: center;"><a class="button" href="{{ invite_link }}">Accept invitation</a></p>
<p>Or paste this link into your browser:<br>{{ invite_link }}</p>
<p>The invitation expires in {{ expires_in_days }} days.</p>
{% endblock %}"""

KYC_RECEIVED = """{% extends "layout.html" %}{% block content %}
<p>Hello {{ name or "there" }},</p>
<p>We received the KYC application for <strong>{{ restaurant_name }}</strong>. Our team will review your documents and get back to you shortly.</p>
{% endblock %}"""

KYC_APPROVED = """{% extends "layout.html" %}{% block content %}
<p>Hello {{ name or "there" }},</p>
<p>Good news: your KYC application for <strong>{{ restaurant_name }}</strong> has been approved. Your restaurant is now active.</p>
<p style="text-align: center;"><a class="button" href="{{ dashboard_link }}">Access your dashboard</a></p>
{% endblock %}"""

KYC_REJECTED = """{% extends "layout.html" %}{% block content %}
<p>Hello {{ name or "there" }},</p>
<p>Unfortunately we could not approve your KYC application for the following reason:</p>
<blockquote>{{ reason }}</blockquote>
<p>You can correct the issue and submit a new application.</p>
<p style="text-align: center;"><a class="button" href="{{ resubmit_link }}">Submit new KYC</a></p>
{% endblock %}"""

_env = Environment(
    loader=DictLoader(
        {
            "layout.html": LAYOUT,
            "verification.html": VERIFICATION,
            "password_reset.html": PASSWORD_RESET,
            "invitation.html": INVITATION,
            "kyc_received.html": KYC_RECEIVED,
            "kyc_approved.html": KYC_APPROVED,
            "kyc_rejected.html": KYC_REJECTED,
        }
    ),
    autoescape=select_autoescape(default=True),
)


def render_email(template: str, **context) -> str:
    """Render one of the named templates."""
    return _env.get_template(template).render(**context)
