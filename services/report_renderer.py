from pathlib import Path
from typing import Any, Dict

from jinja2 import Environment, FileSystemLoader, select_autoescape

from config.settings import settings

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class ReportRenderer:
    def __init__(self, template_dir: str = settings.TEMPLATE_DIR):
        # 템플릿 환경 설정 (상대 경로는 프로젝트 루트 기준)
        path = Path(template_dir)
        if not path.is_absolute():
            path = PROJECT_ROOT / path
        self.env = Environment(
            loader=FileSystemLoader(path),
            autoescape=select_autoescape(["html"]),
        )

    def _render_template(self, template_name: str, data: Dict[str, Any]) -> str:
        """템플릿을 렌더링하여 HTML 생성"""
        template = self.env.get_template(template_name)
        return template.render(**data)

    def render_report_card(self, data: Dict[str, Any]) -> str:
        """인쇄용 성적표 HTML 생성"""
        return self._render_template("report_card.html", data)


report_renderer = ReportRenderer()
