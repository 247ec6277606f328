"""Sign-in, sign-out and password recovery pages."""

from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from starlette.responses import Response

from friends_united_admin.api.forms import form_values
from friends_united_admin.api.session import get_container, get_view_context
from friends_united_admin.api.templating import render
from friends_united_admin.config import DEFAULT_AFTER_LOGIN_PATH, sanitize_next_path
from friends_united_admin.services.session import LOGIN_PATH, ViewContext

router = APIRouter(tags=["auth"])

FORGOT_PASSWORD_PATH = "/forgot-password"


def _session_expired(context: ViewContext) -> RedirectResponse:
    context.notifier.error(
        "Please start the password reset process again.", title="Session Expired"
    )
    return RedirectResponse(FORGOT_PASSWORD_PATH, status_code=303)


@router.get("/auth")
async def login_page(
    request: Request,
    next: str | None = None,  # noqa: A002
    context: ViewContext = Depends(get_view_context),
) -> Response:
    """Show the login form; signed-in viewers go straight to the dashboard."""
    if context.is_authenticated:
        return RedirectResponse(sanitize_next_path(next), status_code=303)
    return render(
        request,
        "auth/login.html",
        {"values": {}, "errors": {}, "next": sanitize_next_path(next)},
    )


@router.post("/auth")
async def login(
    request: Request, context: ViewContext = Depends(get_view_context)
) -> Response:
    form = await request.form()
    values = form_values(form, skip={"next"})
    next_path = sanitize_next_path(str(form.get("next") or ""))
    errors = await get_container(request).account_service(context).login(values)
    if errors:
        return render(
            request,
            "auth/login.html",
            {
                "values": {"email": values.get("email", "")},
                "errors": errors,
                "next": next_path,
            },
            status_code=400,
        )
    return RedirectResponse(next_path, status_code=303)


@router.api_route("/logout", methods=["GET", "POST"])
async def logout(
    request: Request, context: ViewContext = Depends(get_view_context)
) -> Response:
    get_container(request).account_service(context).logout()
    return RedirectResponse(LOGIN_PATH, status_code=303)


@router.get(FORGOT_PASSWORD_PATH)
async def forgot_password_page(request: Request) -> Response:
    return render(request, "auth/forgot_password.html", {"values": {}, "errors": {}})


@router.post(FORGOT_PASSWORD_PATH)
async def forgot_password(
    request: Request, context: ViewContext = Depends(get_view_context)
) -> Response:
    values = form_values(await request.form())
    accounts = get_container(request).account_service(context)
    errors = await accounts.request_password_reset(values)
    if errors:
        return render(
            request,
            "auth/forgot_password.html",
            {"values": values, "errors": errors},
            status_code=400,
        )
    return RedirectResponse(
        f"/otp?{urlencode({'email': values['email']})}", status_code=303
    )


@router.get("/otp")
async def verify_otp_page(
    request: Request,
    email: str | None = None,
    context: ViewContext = Depends(get_view_context),
) -> Response:
    if not email:
        return _session_expired(context)
    return render(request, "auth/otp.html", {"email": email, "errors": {}})


@router.post("/otp")
async def verify_otp(
    request: Request, context: ViewContext = Depends(get_view_context)
) -> Response:
    values = form_values(await request.form())
    if not values.get("email"):
        return _session_expired(context)
    errors = await get_container(request).account_service(context).verify_otp(values)
    if errors:
        return render(
            request,
            "auth/otp.html",
            {"email": values["email"], "errors": errors},
            status_code=400,
        )
    query = urlencode({"email": values["email"], "otp": values["otp"]})
    return RedirectResponse(f"/reset-password?{query}", status_code=303)


@router.post("/otp/resend")
async def resend_otp(
    request: Request, context: ViewContext = Depends(get_view_context)
) -> Response:
    form = await request.form()
    email = str(form.get("email") or "").strip()
    if not email:
        return _session_expired(context)
    await get_container(request).account_service(context).resend_otp(email)
    return RedirectResponse(f"/otp?{urlencode({'email': email})}", status_code=303)


@router.get("/reset-password")
async def reset_password_page(
    request: Request,
    email: str | None = None,
    otp: str | None = None,
    context: ViewContext = Depends(get_view_context),
) -> Response:
    if not email or not otp:
        return _session_expired(context)
    return render(
        request,
        "auth/reset_password.html",
        {"email": email, "otp": otp, "errors": {}},
    )


@router.post("/reset-password")
async def reset_password(
    request: Request, context: ViewContext = Depends(get_view_context)
) -> Response:
    values = form_values(await request.form())
    if not values.get("email"):
        return _session_expired(context)
    accounts = get_container(request).account_service(context)
    errors = await accounts.reset_password(values)
    if errors:
        return render(
            request,
            "auth/reset_password.html",
            {
                "email": values["email"],
                "otp": values.get("otp", ""),
                "errors": errors,
            },
            status_code=400,
        )
    return RedirectResponse(LOGIN_PATH, status_code=303)


@router.get("/")
async def root() -> RedirectResponse:
    return RedirectResponse(DEFAULT_AFTER_LOGIN_PATH, status_code=303)
