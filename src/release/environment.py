"""
환경별 이미지 이름 결정
"""
from src.core.interfaces import Environment


def resolve_image_name(base_name: str, environment: Environment | str) -> str:
    """
    배포 환경에 따른 이미지 이름 반환

    prod는 기본 이름 그대로, 나머지는 "{environment}-{base_name}"

    Args:
        base_name: 기본 이미지 이름 (예: "hello-world-nodejs")
        environment: 배포 환경

    Returns:
        이미지 이름 (예: "dev-hello-world-nodejs")
    """
    env = Environment(environment)
    if env is Environment.PROD:
        return base_name
    return f"{env.value}-{base_name}"
