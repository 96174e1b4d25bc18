"""
Client routes for UI.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db
from app.errors import NotFoundError
from app.models.user import User
from app.schemas.client import ClientCreate, ClientUpdate
from app.services.assessment_service import AssessmentService
from app.services.client_service import ClientService
from app.ui.dependencies import flash_context, get_current_ui_user, redirect_with_message, templates


router = APIRouter()


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _form_page(request: Request, current_user: User, mode: str, client=None, form=None, error=None):
    return templates.TemplateResponse(
        request,
        "client_form.html",
        {
            "current_user": current_user,
            "active_page": "clients",
            "mode": mode,
            "client": client,
            "form": form or {},
            "error": error,
        },
        status_code=400 if error else 200,
    )


@router.get("/ui/clients", response_class=HTMLResponse)
async def clients_list(
    request: Request,
    current_user: User = Depends(get_current_ui_user),
    db: AsyncSession = Depends(get_db),
):
    """
    List the user's clients.
    """
    clients = await ClientService(db).list_clients(current_user.id)

    return templates.TemplateResponse(
        request,
        "clients.html",
        {
            "current_user": current_user,
            "active_page": "clients",
            "clients": clients,
            **flash_context(request),
        },
    )


@router.get("/ui/clients/new", response_class=HTMLResponse)
async def client_create_form(
    request: Request,
    current_user: User = Depends(get_current_ui_user),
):
    """
    Show client create form.
    """
    return _form_page(request, current_user, mode="create")


@router.post("/ui/clients/new")
async def client_create(
    request: Request,
    current_user: User = Depends(get_current_ui_user),
    db: AsyncSession = Depends(get_db),
    company_name: str = Form(...),
    industry: Optional[str] = Form(None),
    contact_name: Optional[str] = Form(None),
    contact_email: Optional[str] = Form(None),
    contact_phone: Optional[str] = Form(None),
    notes: Optional[str] = Form(None),
):
    """
    Handle client create form submission.
    """
    form = {
        "company_name": _clean(company_name),
        "industry": _clean(industry),
        "contact_name": _clean(contact_name),
        "contact_email": _clean(contact_email),
        "contact_phone": _clean(contact_phone),
        "notes": _clean(notes),
    }
    try:
        data = ClientCreate(**form)
    except ValidationError:
        return _form_page(request, current_user, mode="create", form=form, error="Failed to save client")

    await ClientService(db).create_client(current_user.id, data)
    await db.commit()

    return redirect_with_message("/ui/clients", success="Client created successfully")


@router.get("/ui/clients/{client_id}", response_class=HTMLResponse)
async def client_detail(
    request: Request,
    client_id: int,
    current_user: User = Depends(get_current_ui_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Client detail with its assessments.
    """
    try:
        client = await ClientService(db).get_client(current_user.id, client_id)
    except NotFoundError:
        return RedirectResponse(url="/ui/clients", status_code=303)

    assessments = await AssessmentService(db).list_assessments(current_user.id, client_id=client.id)

    return templates.TemplateResponse(
        request,
        "client_detail.html",
        {
            "current_user": current_user,
            "active_page": "clients",
            "client": client,
            "assessments": assessments,
            **flash_context(request),
        },
    )


@router.get("/ui/clients/{client_id}/edit", response_class=HTMLResponse)
async def client_edit_form(
    request: Request,
    client_id: int,
    current_user: User = Depends(get_current_ui_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Show client edit form.
    """
    try:
        client = await ClientService(db).get_client(current_user.id, client_id)
    except NotFoundError:
        return RedirectResponse(url="/ui/clients", status_code=303)

    return _form_page(request, current_user, mode="edit", client=client)


@router.post("/ui/clients/{client_id}/edit")
async def client_edit(
    request: Request,
    client_id: int,
    current_user: User = Depends(get_current_ui_user),
    db: AsyncSession = Depends(get_db),
    company_name: str = Form(...),
    industry: Optional[str] = Form(None),
    contact_name: Optional[str] = Form(None),
    contact_email: Optional[str] = Form(None),
    contact_phone: Optional[str] = Form(None),
    notes: Optional[str] = Form(None),
):
    """
    Handle client edit form submission.
    """
    service = ClientService(db)
    try:
        client = await service.get_client(current_user.id, client_id)
    except NotFoundError:
        return RedirectResponse(url="/ui/clients", status_code=303)

    form = {
        "company_name": _clean(company_name),
        "industry": _clean(industry),
        "contact_name": _clean(contact_name),
        "contact_email": _clean(contact_email),
        "contact_phone": _clean(contact_phone),
        "notes": _clean(notes),
    }
    try:
        data = ClientUpdate(**form)
    except ValidationError:
        return _form_page(request, current_user, mode="edit", client=client, form=form, error="Failed to save client")

    await service.update_client(current_user.id, client.id, data)
    await db.commit()

    return redirect_with_message("/ui/clients", success="Client updated successfully")


@router.post("/ui/clients/{client_id}/delete")
async def client_delete(
    client_id: int,
    current_user: User = Depends(get_current_ui_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Delete a client. Its assessments are left in place.
    """
    try:
        await ClientService(db).delete_client(current_user.id, client_id)
    except NotFoundError:
        return redirect_with_message("/ui/clients", error="Failed to delete client")

    await db.commit()
    return redirect_with_message("/ui/clients", success="Client deleted successfully")
