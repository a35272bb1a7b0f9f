"""
HTML bodies for transactional email.

Placeholders are literal `{token}` markers filled in by `render_template`;
str.format is not used because the inline CSS is full of braces.
"""
from datetime import datetime

_STYLE = """
    body { font-family: 'Segoe UI', Roboto, Helvetica, Arial, sans-serif; margin: 0; padding: 0; background-color: #f8fafc; color: #334155; line-height: 1.6; }
    .container { max-width: 600px; margin: 20px auto; background-color: #ffffff; border-radius: 12px; overflow: hidden; }
    .header { background: #2563eb; padding: 30px 20px; color: #ffffff; text-align: center; }
    .content { padding: 30px; }
    .code { font-size: 32px; font-weight: bold; letter-spacing: 3px; color: #2563eb; background-color: #eff6ff; padding: 20px 40px; border-radius: 8px; display: inline-block; font-family: 'Courier New', monospace; }
    .button { display: inline-block; padding: 12px 24px; background-color: #2563eb; color: #ffffff; text-decoration: none; border-radius: 6px; font-weight: 600; }
    .footer { font-size: 12px; text-align: center; color: #64748b; padding: 20px; border-top: 1px solid #e2e8f0; }
"""


def _page(title: str, heading: str, body: str) -> str:
    year = datetime.now().year
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{title} | Ebee</title>
  <style>{_STYLE}</style>
</head>
<body>
  <div class="container">
    <div class="header"><h1>{heading}</h1></div>
    <div class="content">
{body}
    </div>
    <div class="footer">
      <p>&copy; {year} Ebee. All rights reserved.</p>
      <p>This is an automated message - please do not reply directly to this email.</p>
    </div>
  </div>
</body>
</html>
"""


VERIFICATION_EMAIL_TEMPLATE = _page("Verify Your Email", "Verify Your Email", """
      <p>Dear {name},</p>
      <p>Welcome to Ebee! To complete your registration, please use the following verification code:</p>
      <p class="code">{verificationCode}</p>
      <p>This code will expire in 1 hour.</p>
      <p>If you didn't request this, please ignore this email.</p>
""")

PASSWORD_RESET_REQUEST_TEMPLATE = _page("Reset Your Password", "Password Reset", """
      <p>Dear {name},</p>
      <p>We received a request to reset your Ebee password. Click the button below to choose a new one:</p>
      <p><a class="button" href="{resetLink}">Reset Password</a></p>
      <p>This link will expire in 1 hour. If you didn't request a reset, you can safely ignore this email.</p>
""")

PASSWORD_RESET_SUCCESS_TEMPLATE = _page("Password Reset Successful", "Password Reset Successful", """
      <p>Dear {name},</p>
      <p>Your Ebee password has been changed successfully.</p>
      <p>If you did not make this change, contact our support team immediately.</p>
""")

WELCOME_EMAIL_TEMPLATE = _page("Welcome", "Welcome to Ebee", """
      <p>Dear {name},</p>
      <p>Your account has been created. An administrator will review and approve it shortly.</p>
      <p><a class="button" href="{dashboardLink}">Go to Dashboard</a></p>
""")

ORDER_NOTIFICATION_TEMPLATE = _page("Order Update", "Order Update", """
      <p>Dear {name},</p>
      <p>Order <strong>#{orderNumber}</strong> (total KES {orderTotal})</p>
      <p>{notificationContent}</p>
      <p><a class="button" href="{orderLink}">View Order</a></p>
""")


def render_template(template: str, **values) -> str:
    """Replace each {key} marker with its value; unknown markers are left alone."""
    rendered = template
    for key, value in values.items():
        rendered = rendered.replace("{" + key + "}", str(value))
    return rendered
