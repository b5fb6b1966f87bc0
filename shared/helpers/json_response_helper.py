# app/utils/response_helper.py
from fastapi import HTTPException
from typing import Any

from shared.utils.app_status_code import AppStatusCode
from shared.core.schemas import JsonOutResult


def success_response(data: Any, message: str = "Success", status_code: str = AppStatusCode.DATA_RETRIEVED_SUCCESSFULLY):
    return JsonOutResult(
        data=data,
        status="Success",
        status_code=status_code,
        message=message
    )


def error_response(message: str, status_code: str = AppStatusCode.OPERATION_FAILED, http_status: int = 400, data: Any = None):
    raise HTTPException(
        status_code=http_status,
        detail=JsonOutResult(
            data=data,
            status="Failure",
            status_code=status_code,
            message=message
        ).model_dump()
    )


def not_found(entity: str, entity_id: Any):
    return error_response(
        message=f"{entity} '{entity_id}' not found",
        status_code=AppStatusCode.NOT_FOUND,
        http_status=404
    )


def validation_error(message: str, errors: Any = None):
    return error_response(
        message=message,
        status_code=AppStatusCode.REQUIRED_VALIDATION_ERROR,
        http_status=400,
        data=errors
    )


def conflict_error(message: str):
    return error_response(
        message=message,
        status_code=AppStatusCode.DUPLICATE_ADD_ERROR,
        http_status=409
    )
