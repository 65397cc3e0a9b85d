# src/archview/reporters/__init__.py
"""
報告生成器套件，負責將檔案樹與依賴關係圖匯總為 Markdown 報告。
"""

from .markdown_reporter import generate_markdown_report

__all__ = ["generate_markdown_report"]
