"""
Preflight Check 모듈

파이프라인 실행 전 필수 환경 확인
- 외부 도구 실행 파일 (git, npm, sonar-scanner, docker, trivy)
- 정적 분석 서버 설정
"""
import shutil
from dataclasses import dataclass, field

from src.core.logger import get_logger
from src.core.settings import SonarSettings, ToolSettings


@dataclass
class PreflightResult:
    """Preflight 검사 결과"""
    passed: bool
    tools: dict[str, dict] = field(default_factory=dict)
    sonar: dict = field(default_factory=dict)

    @property
    def sonar_ok(self) -> bool:
        return self.sonar.get("available", False)

    def tool_ok(self, name: str) -> bool:
        return self.tools.get(name, {}).get("available", False)

    def get_failures(self) -> list[str]:
        """실패한 필수 항목 목록 반환"""
        failures = []
        for name, info in self.tools.items():
            if info.get("required") and not info.get("available"):
                failures.append(f"{name}: {info.get('error', 'Unknown')}")
        if not self.sonar.get("available"):
            failures.append(f"SonarQube: {self.sonar.get('error', 'Unknown')}")
        return failures

    def summary(self) -> str:
        """결과 요약 문자열"""
        lines = [f"Preflight: {'PASSED' if self.passed else 'FAILED'}"]
        for name, info in self.tools.items():
            state = "OK" if info.get("available") else ("FAIL" if info.get("required") else "MISSING (optional)")
            lines.append(f"  {name}: {state}")
            if info.get("path"):
                lines.append(f"    Path: {info['path']}")
        lines.append(f"  SonarQube: {'OK' if self.sonar.get('available') else 'FAIL'}")
        return "\n".join(lines)


class PreflightChecker:
    """
    Preflight 검사기

    사용법:
        checker = PreflightChecker(settings.tools, settings.sonar)
        result = checker.run()

        if not result.passed:
            print("Preflight 실패:", result.get_failures())
    """

    def __init__(self, tools: ToolSettings, sonar: SonarSettings):
        self.logger = get_logger(self.__class__.__name__)
        self.tools = tools
        self.sonar = sonar

    def required_tools(self) -> dict[str, tuple[str, bool]]:
        """{표시명: (실행 파일, 필수 여부)}"""
        return {
            "git": (self.tools.git, True),
            "npm": (self.tools.npm, True),
            "sonar-scanner": (self.tools.sonar_scanner, True),
            "docker": (self.tools.docker, True),
            # 스캔 단계는 실패 허용이므로 선택
            "trivy": (self.tools.trivy, False),
        }

    def run(self) -> PreflightResult:
        """
        전체 검사 실행

        Returns:
            PreflightResult (필수 항목 모두 통과 시 passed=True)
        """
        result = PreflightResult(passed=False)

        self.logger.info("[1/2] 외부 도구 확인...")
        for name, (executable, required) in self.required_tools().items():
            self._check_tool(result, name, executable, required)

        self.logger.info("[2/2] SonarQube 설정 확인...")
        self._check_sonar(result)

        result.passed = not result.get_failures()
        if result.passed:
            self.logger.info("Preflight 통과")
        else:
            self.logger.error(f"Preflight 실패: {result.get_failures()}")
        return result

    def _check_tool(self, result: PreflightResult, name: str, executable: str, required: bool):
        """실행 파일 PATH 확인"""
        path = shutil.which(executable)
        info = {"available": path is not None, "required": required, "path": path}
        if path:
            self.logger.info(f"  ✓ {name}: {path}")
        else:
            info["error"] = f"실행 파일 없음 ({executable})"
            if required:
                self.logger.warning(f"  ✗ {name} 없음")
            else:
                self.logger.warning(f"  ✗ {name} 없음 (선택 사항)")
        result.tools[name] = info

    def _check_sonar(self, result: PreflightResult):
        """정적 분석 서버 URL/토큰 확인"""
        if not self.sonar.server_url:
            result.sonar = {"available": False, "error": "서버 URL이 설정되지 않음 (sonar.server_url)"}
            self.logger.warning("  ✗ SonarQube 서버 URL 없음")
            return
        if not self.sonar.token:
            result.sonar = {"available": False, "error": "토큰이 설정되지 않음 (SONAR_TOKEN)"}
            self.logger.warning("  ✗ SonarQube 토큰 없음")
            return

        result.sonar = {"available": True, "server_url": self.sonar.server_url}
        self.logger.info(f"  ✓ SonarQube: {self.sonar.server_url}")
