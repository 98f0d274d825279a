from .notify import run_missing_reports_alert


def send_missing_reports_email(ctx):
    """On-demand missing reports alert (any signed-in member)."""
    ctx.require_user()
    return run_missing_reports_alert(ctx.today)
