from html import escape

from foreclosure_hub.core.config import settings
from foreclosure_hub.services.sale_options_service import money

# Every template returns (subject, html)

FOOTER = """
<div style="background:#f9f9f9;padding:20px;text-align:center;font-size:12px;color:#666;border-top:1px solid #e0e0e0">
  <p>EnterActDFW Real Estate Brokerage</p>
  <p>4400 State Hwy 121, Suite 300, Lewisville, Texas 75056</p>
  <p>Phone: {phone} | Email: info@enteractdfw.com</p>
</div>
"""


def _layout(heading: str, content: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<body style="font-family:Arial,sans-serif;line-height:1.6;color:#333;background:#f4f4f4;margin:0;padding:0">
  <div style="max-width:600px;margin:20px auto;background:white;border-radius:8px;overflow:hidden">
    <div style="background:#0891B2;color:white;padding:30px 20px;text-align:center">
      <h1 style="margin:0;font-size:24px">{heading}</h1>
    </div>
    <div style="padding:30px 20px">{content}</div>
    {FOOTER.format(phone=settings.CONTACT_PHONE)}
  </div>
</body>
</html>"""


def welcome_email(first_name: str):
    content = f"""
    <p>Hi {escape(first_name)},</p>
    <p>Thank you for reaching out. A foreclosure specialist will contact you within one business day.</p>
    <p>In the meantime, our knowledge base walks through every stage of the Texas foreclosure process:</p>
    <p><a href="{settings.SITE_URL}/knowledge-base">{settings.SITE_URL}/knowledge-base</a></p>
    <p>If your sale date is close, call us now at <strong>{settings.CONTACT_PHONE}</strong>.</p>
    """
    return "Welcome to EnterActDFW - Your Foreclosure Help Starts Here", _layout("You're Not Alone", content)


def guide_download_email(name: str, resource_name: str, resource_url: str):
    content = f"""
    <p>Hi {escape(name)},</p>
    <p>Here is your copy of <strong>{escape(resource_name)}</strong>:</p>
    <p><a href="{escape(resource_url, quote=True)}">Download the guide</a></p>
    <p>Questions about your situation? Call {settings.CONTACT_PHONE}.</p>
    """
    return f"Your Free Guide: {resource_name}", _layout(escape(resource_name), content)


def timeline_email(first_name: str, notice_date):
    formatted = notice_date.strftime("%A, %B %d, %Y").replace(" 0", " ")
    content = f"""
    <p>Hi {escape(first_name)},</p>
    <p>Thank you for using our Foreclosure Timeline Calculator. Your personalized timeline is attached as a PDF.</p>
    <div style="background:#FEF3C7;padding:15px;border-left:4px solid #F59E0B;margin:20px 0">
      <strong>Notice of Default Date:</strong> {formatted}
    </div>
    <p>The timeline lists every key milestone with its date, urgency and action items.</p>
    <p>Need help now? Call <strong>{settings.CONTACT_PHONE}</strong>.</p>
    """
    return "Your Personalized Foreclosure Timeline", _layout("Your Personalized Foreclosure Timeline", content)


def comparison_email(first_name: str, comparison: dict):
    option_rows = "".join(
        f"""
      <tr style="background:{'#ECFEFF' if o['recommended'] else 'white'}">
        <td style="padding:8px;border:1px solid #e0e0e0"><strong>{escape(o['name'])}</strong>{' (recommended)' if o['recommended'] else ''}</td>
        <td style="padding:8px;border:1px solid #e0e0e0">{escape(o['timeline'])}</td>
        <td style="padding:8px;border:1px solid #e0e0e0">{money(o['net_proceeds'])}</td>
      </tr>"""
        for o in comparison["options"]
    )
    content = f"""
    <p>Hi {escape(first_name)},</p>
    <p>Here is your property sale options comparison. The full report is attached as a PDF.</p>
    <div style="background:#FEF3C7;padding:15px;border-left:4px solid #F59E0B;margin:20px 0">
      <strong>Estimated value:</strong> {money(comparison['property_value'])}<br>
      <strong>Equity:</strong> {money(comparison['equity'])} ({comparison['equity_percentage']}%)
    </div>
    <table style="width:100%;border-collapse:collapse;font-size:14px">
      <tr><th align="left">Option</th><th align="left">Timeline</th><th align="left">Net proceeds</th></tr>{option_rows}
    </table>
    <p>Want a firm cash offer? Call <strong>{settings.CONTACT_PHONE}</strong>.</p>
    """
    return "Your Property Sale Options Comparison", _layout("Your Sale Options Comparison", content)
