from fastapi import Request

from conference_portal.core.config import Settings
from conference_portal.services.admin import AdminService
from conference_portal.services.payments import PaymentService
from conference_portal.services.registrations import RegistrationService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_registration_service(request: Request) -> RegistrationService:
    return request.app.state.registration_service


def get_payment_service(request: Request) -> PaymentService:
    return request.app.state.payment_service


def get_admin_service(request: Request) -> AdminService:
    return request.app.state.admin_service
