"""Dashboard, content editor, users and contacts pages."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from starlette.responses import Response

from friends_united_admin.adapters.http_gateway import ApiError
from friends_united_admin.api.forms import form_values, read_submission
from friends_united_admin.api.session import get_container, require_session
from friends_united_admin.api.templating import render
from friends_united_admin.domain.content import Creating, Editing, EditorMode
from friends_united_admin.services.editor import EditorState
from friends_united_admin.services.resources import Resource, ResourceDefinition
from friends_united_admin.services.session import ViewContext

router = APIRouter(tags=["content"])

SERVICES = Resource.SERVICES.value
USERS_PATH = "/content/users"
CONTACTS_PATH = "/contacts"


def _render_editor(
    request: Request,
    resource: ResourceDefinition,
    state: EditorState,
    *,
    status_code: int = 200,
) -> Response:
    return render(
        request,
        resource.template,
        {"resource": resource, "state": state, **resource.options},
        status_code=status_code,
    )


async def _submit(
    request: Request,
    context: ViewContext,
    resource: ResourceDefinition,
    mode: EditorMode | None = None,
) -> Response:
    """Validate and save a content form, then render the persisted state.

    On failure the submitted values are rendered again with the mode the form
    had before the submit.
    """
    submitted_mode, values, images = await read_submission(
        await request.form(), resource.image_fields
    )
    mode = mode or submitted_mode
    editor = get_container(request).content_editor(context, resource)
    try:
        state = await editor.submit(mode, values, images)
    except ApiError:
        state = EditorState(mode=mode, values=values, images=images)
        return _render_editor(request, resource, state, status_code=502)
    if state.errors:
        return _render_editor(request, resource, state, status_code=400)
    context.notifier.success(f"{resource.title} has been saved successfully.")
    return _render_editor(request, resource, state)


def _register_singleton(resource: ResourceDefinition) -> None:
    async def show(
        request: Request, context: ViewContext = Depends(require_session)
    ) -> Response:
        editor = get_container(request).content_editor(context, resource)
        return _render_editor(request, resource, await editor.load())

    async def save(
        request: Request, context: ViewContext = Depends(require_session)
    ) -> Response:
        return await _submit(request, context, resource)

    name = resource.type_name
    router.add_api_route(resource.path, show, methods=["GET"], name=f"{name}_page")
    router.add_api_route(resource.path, save, methods=["POST"], name=f"{name}_save")


for _entry in Resource:
    if _entry.value.singleton:
        _register_singleton(_entry.value)


@router.get("/dashboard")
async def dashboard(
    request: Request, context: ViewContext = Depends(require_session)
) -> Response:
    cards = await get_container(request).dashboard_service(context).cards()
    return render(request, "dashboard.html", {"cards": cards})


@router.get(SERVICES.path)
async def list_services(
    request: Request, context: ViewContext = Depends(require_session)
) -> Response:
    editor = get_container(request).content_editor(context, SERVICES)
    services = await editor.list_documents()
    return render(
        request, "content/services.html", {"resource": SERVICES, "services": services}
    )


@router.get(f"{SERVICES.path}/new")
async def new_service(
    request: Request, context: ViewContext = Depends(require_session)
) -> Response:
    editor = get_container(request).content_editor(context, SERVICES)
    return _render_editor(request, SERVICES, editor.blank_state())


@router.post(f"{SERVICES.path}/new")
async def create_service(
    request: Request, context: ViewContext = Depends(require_session)
) -> Response:
    return await _submit(request, context, SERVICES)


@router.get(f"{SERVICES.path}/{{service_id}}")
async def edit_service(
    service_id: str, request: Request, context: ViewContext = Depends(require_session)
) -> Response:
    editor = get_container(request).content_editor(context, SERVICES)
    state = await editor.load(service_id)
    if isinstance(state.mode, Creating):
        context.notifier.error(
            "The requested service was not found.", title="Not Found"
        )
        return RedirectResponse(SERVICES.path, status_code=303)
    return _render_editor(request, SERVICES, state)


@router.post(f"{SERVICES.path}/{{service_id}}")
async def update_service(
    service_id: str, request: Request, context: ViewContext = Depends(require_session)
) -> Response:
    return await _submit(request, context, SERVICES, mode=Editing(service_id))


@router.post(f"{SERVICES.path}/{{service_id}}/delete")
async def delete_service(
    service_id: str, request: Request, context: ViewContext = Depends(require_session)
) -> Response:
    editor = get_container(request).content_editor(context, SERVICES)
    try:
        await editor.delete(service_id)
    except ApiError:
        return RedirectResponse(SERVICES.path, status_code=303)
    context.notifier.success("Service has been deleted successfully.")
    return RedirectResponse(SERVICES.path, status_code=303)


@router.get(USERS_PATH)
async def users_page(
    request: Request, context: ViewContext = Depends(require_session)
) -> Response:
    return render(request, "content/users.html", {"values": {}, "errors": {}})


@router.post(USERS_PATH)
async def create_user(
    request: Request, context: ViewContext = Depends(require_session)
) -> Response:
    values = form_values(await request.form())
    errors = await get_container(request).account_service(context).create_user(values)
    if errors:
        return render(
            request,
            "content/users.html",
            {"values": {**values, "password": ""}, "errors": errors},
            status_code=400,
        )
    return RedirectResponse(USERS_PATH, status_code=303)


@router.get(CONTACTS_PATH)
async def list_contacts(
    request: Request, context: ViewContext = Depends(require_session)
) -> Response:
    contacts = await get_container(request).contact_service(context).list_contacts()
    return render(request, "contacts/list.html", {"contacts": contacts})


@router.get(f"{CONTACTS_PATH}/{{contact_id}}")
async def show_contact(
    contact_id: str, request: Request, context: ViewContext = Depends(require_session)
) -> Response:
    service = get_container(request).contact_service(context)
    contact = await service.get_contact(contact_id)
    if contact is None:
        context.notifier.error(
            "The requested contact was not found.", title="Not Found"
        )
        return RedirectResponse(CONTACTS_PATH, status_code=303)
    return render(request, "contacts/detail.html", {"contact": contact})


@router.post(f"{CONTACTS_PATH}/{{contact_id}}/delete")
async def delete_contact(
    contact_id: str, request: Request, context: ViewContext = Depends(require_session)
) -> Response:
    service = get_container(request).contact_service(context)
    try:
        await service.delete_contact(contact_id)
    except ApiError:
        return RedirectResponse(CONTACTS_PATH, status_code=303)
    context.notifier.success("Contact has been deleted successfully.")
    return RedirectResponse(CONTACTS_PATH, status_code=303)
