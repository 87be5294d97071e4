"""Server-rendered HTML pages."""

from collections.abc import Iterable
from html import escape

from abstract_portal.domain.accounts import AccountProfile, AccountType
from abstract_portal.domain.applications import Application, ReviewerRole
from abstract_portal.domain.sessions import SessionUser

BRAND = "Abstract Review Portal"

_PAGE_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>{title} | {brand}</title>
    <style>
      body {{ font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }}
      header {{ display: flex; justify-content: space-between; align-items: center; }}
      .brand {{ font-weight: 700; font-size: 1.2rem; }}
      .row {{ margin-bottom: 1rem; }}
      input[type=text], input[type=email], input[type=password] {{ padding: 0.4rem 0.6rem; width: 320px; }}
      button {{ padding: 0.4rem 0.8rem; margin-right: 0.5rem; }}
      table {{ border-collapse: collapse; margin-bottom: 1.5rem; }}
      th, td {{ border: 1px solid #ddd; padding: 0.4rem 0.6rem; text-align: left; }}
      form.inline {{ display: inline; }}
    </style>
  </head>
  <body>
    <header>
      <a class="brand" href="/">{brand}</a>
      {nav}
    </header>
    <h1>{title}</h1>
    {body}
  </body>
</html>
"""

_LOGOUT_FORM = """<form class="inline" method="post" action="/logout">
        <span>{who}</span>
        <button type="submit">Log out</button>
      </form>"""


def _who(user: SessionUser) -> str:
    return escape(user.email or user.username or user.id)


def render_page(title: str, body: str, user: SessionUser | None = None) -> str:
    """Wrap page content in the shared layout."""
    nav = _LOGOUT_FORM.format(who=_who(user)) if user else '<a href="/login">Login</a>'
    return _PAGE_HTML.format(title=escape(title), brand=BRAND, nav=nav, body=body)


def index_page() -> str:
    return render_page(
        "Welcome",
        f"""<p>{BRAND} manages abstract submissions, reviewer volunteers and
    committee decisions.</p>
    <p><a href="/login"><button type="button">Login</button></a></p>""",
    )


def login_page() -> str:
    return render_page(
        "Login",
        """<form method="post" action="/login">
      <div class="row">
        <label for="identifier">Email or username</label><br />
        <input id="identifier" name="identifier" type="text" required />
      </div>
      <div class="row">
        <label for="password">Password</label><br />
        <input id="password" name="password" type="password" required />
      </div>
      <button type="submit">Login</button>
    </form>
    <p><a href="/register"><button type="button">Create account</button></a></p>""",
    )


def register_choice_page() -> str:
    return render_page(
        "Create an account",
        """<p>Choose the type of account to create.</p>
    <ul>
      <li><a href="/register/student">Student</a></li>
      <li><a href="/register/reviewer">Reviewer</a></li>
      <li><a href="/register/committee">Committee</a></li>
    </ul>""",
    )


def register_form_page(account_type: AccountType) -> str:
    """Registration form; reviewers and committee members give a subject area."""
    subject_area = ""
    if account_type in (AccountType.REVIEWER, AccountType.COMMITTEE):
        subject_area = """
      <div class="row">
        <label for="subjectArea">Subject area</label><br />
        <input id="subjectArea" name="subjectArea" type="text" />
      </div>"""
    path = account_type.value.lower()
    return render_page(
        f"{account_type.value} registration",
        f"""<form method="post" action="/register/{path}">
      <div class="row">
        <label for="email">Email</label><br />
        <input id="email" name="email" type="email" required />
      </div>
      <div class="row">
        <label for="password">Password</label><br />
        <input id="password" name="password" type="password" required />
      </div>{subject_area}
      <button type="submit">Create {path} account</button>
    </form>""",
    )


def pending_dashboard(user: SessionUser) -> str:
    return render_page(
        "Dashboard",
        f"""<p>Your {escape(user.account_type)} account status is
    <strong>{escape(user.status or "unknown")}</strong>.</p>
    <p>Your dashboard becomes available once the committee approves your
    account. Log in again after approval.</p>""",
        user,
    )


def student_dashboard(user: SessionUser) -> str:
    return render_page(
        "Student dashboard",
        "<p>Your account is approved. Abstract submission opens soon.</p>",
        user,
    )


def reviewer_dashboard(user: SessionUser, application: Application | None) -> str:
    if application is None:
        summary = (
            '<p>You have not applied for reviewer duties yet. '
            '<a href="/reviewer/application">Apply now</a>.</p>'
        )
    else:
        summary = (
            f"<p>Your application is <strong>{application.status.value}</strong>. "
            '<a href="/reviewer/application">View application</a>.</p>'
        )
    return render_page("Reviewer dashboard", summary, user)


def _decision_forms(path: str) -> str:
    return (
        f'<form class="inline" method="post" action="{path}/approve">'
        '<button type="submit">Approve</button></form>'
        f'<form class="inline" method="post" action="{path}/deny">'
        '<button type="submit">Deny</button></form>'
    )


def _roles(roles: Iterable[ReviewerRole]) -> str:
    return escape(", ".join(role.value for role in roles))


def committee_dashboard(
    user: SessionUser,
    applications: list[Application],
    accounts: list[AccountProfile],
) -> str:
    """Two decision queues: pending applications and pending accounts."""
    application_rows = "".join(
        f"""
        <tr>
          <td>{escape(app.name)}</td>
          <td>{escape(app.email)}</td>
          <td>{escape(app.department)}</td>
          <td>{_roles(app.roles)}</td>
          <td>{_decision_forms(f"/committee/applications/{app.id}")}</td>
        </tr>"""
        for app in applications
    ) or '<tr><td colspan="5">No pending applications.</td></tr>'
    account_rows = "".join(
        f"""
        <tr>
          <td>{account.account_type.value}</td>
          <td>{escape(account.email or account.username or "")}</td>
          <td>{escape(account.subject_area or "")}</td>
          <td>{_decision_forms(f"/committee/accounts/{account.id}")}</td>
        </tr>"""
        for account in accounts
    ) or '<tr><td colspan="4">No pending accounts.</td></tr>'
    return render_page(
        "Committee dashboard",
        f"""<h2>Pending reviewer applications</h2>
    <table id="pending-applications">
      <tr><th>Name</th><th>Email</th><th>Department</th><th>Roles</th><th>Decision</th></tr>{application_rows}
    </table>
    <h2>Pending accounts</h2>
    <table id="pending-accounts">
      <tr><th>Type</th><th>Email</th><th>Subject area</th><th>Decision</th></tr>{account_rows}
    </table>""",
        user,
    )


def admin_dashboard(user: SessionUser) -> str:
    return render_page(
        "Admin dashboard",
        '<p><a href="/admin/accounts">Manage accounts</a></p>',
        user,
    )


def application_form_page(user: SessionUser) -> str:
    checkboxes = "".join(
        f"""
      <div><label><input type="checkbox" name="roles" value="{escape(role.value)}" />
        {escape(role.value)}</label></div>"""
        for role in ReviewerRole
    )
    return render_page(
        "Reviewer application",
        f"""<form method="post" action="/reviewer/application">
      <div class="row">
        <label for="name">Name</label><br />
        <input id="name" name="name" type="text" required />
      </div>
      <div class="row">
        <label for="department">Department</label><br />
        <input id="department" name="department" type="text" required />
      </div>
      <div class="row">
        <label for="email">Email</label><br />
        <input id="email" name="email" type="email" value="{escape(user.email or "")}" required />
      </div>
      <fieldset class="row">
        <legend>Roles</legend>{checkboxes}
      </fieldset>
      <button type="submit">Submit application</button>
    </form>""",
        user,
    )


def application_status_page(user: SessionUser, application: Application) -> str:
    return render_page(
        "Reviewer application",
        f"""<p>Application submitted.</p>
    <dl>
      <dt>Name</dt><dd>{escape(application.name)}</dd>
      <dt>Department</dt><dd>{escape(application.department)}</dd>
      <dt>Email</dt><dd>{escape(application.email)}</dd>
      <dt>Roles</dt><dd>{_roles(application.roles)}</dd>
      <dt>Status</dt><dd>{application.status.value}</dd>
    </dl>""",
        user,
    )


_MANAGED_TYPES = (AccountType.STUDENT, AccountType.REVIEWER, AccountType.COMMITTEE)


def manage_accounts_page(user: SessionUser, accounts: list[AccountProfile]) -> str:
    """Non-Admin accounts grouped by type, each with a Delete action."""
    sections = []
    for account_type in _MANAGED_TYPES:
        rows = "".join(
            f"""
        <tr>
          <td>{escape(account.email or account.username or "")}</td>
          <td>{escape(account.subject_area or "")}</td>
          <td>{account.status.value}</td>
          <td><form class="inline" method="post" action="/admin/accounts/{account.id}/delete">
            <button type="submit">Delete</button></form></td>
        </tr>"""
            for account in accounts
            if account.account_type is account_type
        ) or '<tr><td colspan="4">No accounts.</td></tr>'
        sections.append(
            f"""<h2>{account_type.value} accounts</h2>
    <table id="{account_type.value.lower()}-accounts">
      <tr><th>Email</th><th>Subject area</th><th>Status</th><th></th></tr>{rows}
    </table>"""
        )
    return render_page("Manage accounts", "\n    ".join(sections), user)
