"""
Doctor registration, login and profile endpoints.
"""

from fastapi import APIRouter, Request, status

from ...application.dto.auth_dto import (
    ChangePasswordRequest as ChangePasswordDTO,
    LoginRequest as LoginDTO,
    RegisterDoctorRequest,
    UpdateProfileRequest as UpdateProfileDTO,
)
from ...application.use_cases.login_doctor import LoginDoctorUseCase
from ...application.use_cases.register_doctor import RegisterDoctorUseCase
from ...application.use_cases.update_profile import ChangePasswordUseCase, UpdateProfileUseCase
from ..deps import CurrentDoctor, DoctorRepositoryDep, PasswordHasherDep, TokenServiceDep
from ..schemas.auth import (
    AuthData,
    ChangePasswordRequest,
    DoctorOut,
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
)
from ..schemas.common import ERROR_RESPONSES, ApiResponse, ErrorResponse
from ..utils.responses import ok

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=ApiResponse[AuthData],
    status_code=status.HTTP_201_CREATED,
    summary="Register a doctor account",
    responses={400: ERROR_RESPONSES[400], 409: {"model": ErrorResponse, "description": "Email or license taken"}},
)
async def register(
    request: Request,
    payload: RegisterRequest,
    doctors: DoctorRepositoryDep,
    hasher: PasswordHasherDep,
    tokens: TokenServiceDep,
):
    use_case = RegisterDoctorUseCase(doctors, hasher, tokens)
    result = await use_case.execute(
        RegisterDoctorRequest(
            name=payload.name,
            email=str(payload.email),
            password=payload.password,
            phone=payload.phone,
            specialization=payload.specialization,
            license_number=payload.license_number,
            experience_years=payload.experience_years,
            address=payload.address,
            city=payload.city,
            state=payload.state,
        )
    )
    return ok(
        request,
        data=AuthData(token=result.token, expires_in=result.expires_in, doctor=DoctorOut.from_domain(result.doctor)),
        message="Doctor registered successfully",
    )


@router.post(
    "/login",
    response_model=ApiResponse[AuthData],
    summary="Exchange credentials for an access token",
    responses={401: ERROR_RESPONSES[401]},
)
async def login(
    request: Request,
    payload: LoginRequest,
    doctors: DoctorRepositoryDep,
    hasher: PasswordHasherDep,
    tokens: TokenServiceDep,
):
    use_case = LoginDoctorUseCase(doctors, hasher, tokens)
    result = await use_case.execute(LoginDTO(email=str(payload.email), password=payload.password))
    return ok(
        request,
        data=AuthData(token=result.token, expires_in=result.expires_in, doctor=DoctorOut.from_domain(result.doctor)),
        message="Login successful",
    )


@router.get(
    "/profile",
    response_model=ApiResponse[DoctorOut],
    summary="Current doctor's profile",
    responses={401: ERROR_RESPONSES[401], 403: ERROR_RESPONSES[403]},
)
async def get_profile(request: Request, doctor: CurrentDoctor):
    return ok(request, data=DoctorOut.from_domain(doctor), message="OK")


@router.put(
    "/profile",
    response_model=ApiResponse[DoctorOut],
    summary="Update editable profile fields",
    responses=ERROR_RESPONSES,
)
async def update_profile(
    request: Request,
    payload: UpdateProfileRequest,
    doctor: CurrentDoctor,
    doctors: DoctorRepositoryDep,
):
    updated = await UpdateProfileUseCase(doctors).execute(
        doctor.id,
        UpdateProfileDTO(
            name=payload.name,
            phone=payload.phone,
            address=payload.address,
            city=payload.city,
            state=payload.state,
        ),
    )
    return ok(request, data=DoctorOut.from_domain(updated), message="Profile updated successfully")


@router.put(
    "/change-password",
    response_model=ApiResponse[dict],
    summary="Change the current doctor's password",
    responses=ERROR_RESPONSES,
)
async def change_password(
    request: Request,
    payload: ChangePasswordRequest,
    doctor: CurrentDoctor,
    doctors: DoctorRepositoryDep,
    hasher: PasswordHasherDep,
):
    await ChangePasswordUseCase(doctors, hasher).execute(
        doctor.id,
        ChangePasswordDTO(current_password=payload.current_password, new_password=payload.new_password),
    )
    return ok(request, data={}, message="Password changed successfully")
