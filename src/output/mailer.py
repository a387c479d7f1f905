"""
SMTP 메일 전송

SMTP 설정이 없으면 test mode로 동작 (전송 대신 로그)
"""
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from src.core.exceptions import MailError
from src.core.interfaces import Mailer
from src.core.logger import get_logger
from src.core.settings import MailSettings


def split_recipients(recipients: str) -> list[str]:
    """쉼표/세미콜론 구분 수신자 목록"""
    parts = recipients.replace(";", ",").split(",")
    return [p.strip() for p in parts if p.strip()]


def mask_email(email: str) -> str:
    """로그용 이메일 마스킹"""
    if "@" in email:
        user, domain = email.split("@", 1)
        masked_user = user[:2] + "***" if len(user) > 3 else "***"
        return f"{masked_user}@{domain}"
    return "***"


class SmtpMailer(Mailer):
    """
    smtplib 기반 메일 전송기

    사용법:
        mailer = SmtpMailer(settings.mail)
        mailer.send("ci@example.com", "team@example.com", "제목", "<html>...</html>")
    """

    def __init__(self, settings: MailSettings, test_mode: bool = False):
        self.logger = get_logger(self.__class__.__name__)
        self.settings = settings
        self.test_mode = test_mode

        if not test_mode and not settings.smtp_host:
            self.logger.warning("SMTP 호스트 미설정, test mode로 동작")
            self.test_mode = True

    def build_message(self, sender: str, to: str, subject: str, html_body: str) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = sender
        message["To"] = ", ".join(split_recipients(to))
        message.attach(MIMEText(html_body, "html", "utf-8"))
        return message

    def send(self, sender: str, to: str, subject: str, html_body: str) -> None:
        recipients = split_recipients(to)
        if not recipients:
            raise MailError("수신자가 지정되지 않았습니다")

        if self.test_mode:
            self.logger.info(
                f"TEST MODE: 메일 전송 생략 -> {', '.join(mask_email(r) for r in recipients)} | {subject}"
            )
            return

        message = self.build_message(sender, to, subject, html_body)
        s = self.settings

        try:
            with smtplib.SMTP(s.smtp_host, s.smtp_port, timeout=s.timeout_seconds) as smtp:
                if s.use_tls:
                    smtp.starttls()
                if s.smtp_user:
                    smtp.login(s.smtp_user, s.smtp_password)
                smtp.sendmail(sender, recipients, message.as_string())
        except (smtplib.SMTPException, OSError) as e:
            raise MailError(f"메일 전송 실패: {e}", {"host": s.smtp_host})

        self.logger.info(f"메일 전송 완료: {', '.join(mask_email(r) for r in recipients)}")
