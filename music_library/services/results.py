from typing import Any, Dict


def success(**payload: Any) -> Dict[str, Any]:
    """{"success": True, ...} 형태의 결과를 만듭니다. 값이 None인 키는 포함하지 않습니다."""
    result = {"success": True}
    result.update({key: value for key, value in payload.items() if value is not None})
    return result


def failure(error: str) -> Dict[str, Any]:
    return {"success": False, "error": error}
