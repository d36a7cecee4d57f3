#!/usr/bin/env python
# coding: utf-8
"""
レポートテンプレートレンダラー

Jinja2を使用してMarkdownレポートを生成
"""

from jinja2 import Environment, FileSystemLoader, select_autoescape
from pathlib import Path
import logging

logger = logging.getLogger(__name__)


class CalendarReportRenderer:
    """月間カレンダー・グラフレポートのテンプレートレンダラー"""

    def __init__(self, template_dir=None):
        """
        Parameters
        ----------
        template_dir : str or Path, optional
            テンプレートディレクトリのパス
            Noneの場合はプロジェクトルート/templatesを使用
        """
        if template_dir is None:
            template_dir = Path(__file__).resolve().parents[3] / 'templates'

        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape([]),  # Markdownなのでautoescape無効
            trim_blocks=True,
            lstrip_blocks=True
        )

        self._register_filters()

    def _register_filters(self):
        """カスタムフィルタをJinja2環境に登録"""
        from .filters import format_change, number_format, steps_badge, month_label

        self.env.filters['format_change'] = format_change
        self.env.filters['number_format'] = number_format
        self.env.filters['steps_badge'] = steps_badge
        self.env.filters['month_label'] = month_label

    def _render(self, template_name, context):
        try:
            template = self.env.get_template(template_name)
            return template.render(**context)
        except Exception as e:
            logger.error(f"Template rendering failed: {e}")
            raise

    def render_month_report(self, context):
        """
        月間カレンダーレポートを生成

        Parameters
        ----------
        context : dict
            テンプレートコンテキスト
            必須キー: year, month, rows, target_steps, steps_stats, weight_stats

        Returns
        -------
        str
            レンダリングされたMarkdown

        Raises
        ------
        jinja2.TemplateNotFound
            テンプレートファイルが見つからない場合
        """
        return self._render('calendar/month_report.md.j2', context)

    def render_chart_report(self, context):
        """
        グラフレポートを生成

        Parameters
        ----------
        context : dict
            テンプレートコンテキスト
            必須キー: title, view, chart_image

        Returns
        -------
        str
            レンダリングされたMarkdown
        """
        return self._render('chart/chart_report.md.j2', context)
