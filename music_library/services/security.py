import bcrypt

BCRYPT_ROUNDS = 10
# bcrypt는 비밀번호의 앞 72바이트만 사용
PASSWORD_MAX_BYTES = 72
PASSWORD_TOO_LONG = f"Password cannot exceed {PASSWORD_MAX_BYTES} bytes"


def is_password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > PASSWORD_MAX_BYTES


def hash_password(password: str) -> str:
    """
    평문 비밀번호를 salt가 포함된 bcrypt 해시 문자열로 변환합니다.

    Raises:
        ValueError: 비밀번호가 PASSWORD_MAX_BYTES를 넘을 때. 호출자가 먼저 길이를 검사해야 합니다.
    """
    if is_password_too_long(password):
        raise ValueError(PASSWORD_TOO_LONG)
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    평문 비밀번호가 저장된 해시와 일치하는지 검사합니다.

    비교는 bcrypt.checkpw(상수 시간 비교)로 수행하며, 해시 형식이 잘못되었거나
    비밀번호가 저장 가능한 길이를 넘으면 False를 반환합니다.
    """
    if not password or not password_hash or is_password_too_long(password):
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False
