# src/archview/core/interactive_wizard.py
"""
負責處理大型依賴關係圖渲染前的使用者互動：推薦分類過濾或搜尋詞以縮小圖表。
"""

# 1. 標準庫導入
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

# 2. 第三方庫導入
# (無)

# 3. 本專案導入
from archview.builders.graph_projector import matches_category
from archview.core.config_loader import ConfigLoader
from archview.intelligence.graph_analyzer import GraphAnalyzer
from archview.models.architecture_models import ComponentNode
from archview.models.view_models import CategoryFilter, ProjectedGraph


class InteractiveWizard:
    """
    一個基於分類分佈的互動式配置精靈。
    統計每個分類過濾器能保留的組件數，讓使用者挑選一個合適的範圍。
    """

    def __init__(self, config_path: Path):
        self.config_path = config_path
        self.category_counts: list[tuple[CategoryFilter, int]] = []

    def analyze_categories(self, components: Sequence[ComponentNode]):
        """計算每個非 'all' 分類過濾器會保留的組件數。"""
        counts = []
        for category in CategoryFilter:
            if category == CategoryFilter.ALL:
                continue
            count = sum(1 for c in components if matches_category(c, category))
            if count:
                counts.append((category, count))
        self.category_counts = sorted(counts, key=lambda item: (-item[1], item[0].value))
        logging.debug(f"[Wizard] 分類分佈: {[(c.value, n) for c, n in self.category_counts]}")

    def run(self, components: Sequence[ComponentNode], projected: ProjectedGraph) -> str:
        """執行互動式精靈，回傳 'proceed' 或 'exit'。"""
        self.analyze_categories(components)
        layer_sizes = GraphAnalyzer(projected).layer_sizes()
        self._display_menu(len(projected.nodes), layer_sizes, self.category_counts)

        updates, action = self._get_user_choice(self.category_counts)
        if updates:
            ConfigLoader.update_config_file(self.config_path, updates)
        return action

    @staticmethod
    def _display_menu(
        node_count: int,
        layer_sizes: list[tuple[str, int]],
        category_counts: list[tuple[CategoryFilter, int]],
    ):
        """顯示互動式選單給使用者。"""
        print("\n" + "=" * 60)
        logging.info(f"ArchView 投影出一個包含 {node_count} 個節點的依賴關係圖。")
        logging.warning("圖表過於龐大，直接渲染將導致視覺雜訊。")
        print("-" * 60)
        print("各架構層的節點數：")
        for group, count in layer_sizes[:5]:
            print(f"  - {group}: {count}")

        print("\n您可以選擇一個分類過濾器，或選擇其他選項：")
        for i, (category, count) in enumerate(category_counts):
            print(f"  {i + 1}. [分類過濾] {category.value} (保留 {count} 個組件)")

        base_idx = len(category_counts)
        print(f"  {base_idx + 1}. [搜尋] 手動輸入搜尋詞 (比對名稱、檔案路徑與描述)。")
        print(f"  {base_idx + 2}. [強制執行] 忽略建議，繼續渲染完整圖表 (不推薦)。")
        print(f"  {base_idx + 3}. [退出] 終止處理。")
        print("=" * 60)

    @staticmethod
    def _get_user_choice(category_counts: list[tuple[CategoryFilter, int]]) -> tuple[dict[str, Any], str]:
        """獲取並處理使用者的選擇。"""
        updates: dict[str, Any] = {}
        action = "proceed"
        max_choice = len(category_counts) + 3

        while True:
            try:
                choice_str = input(f"請輸入您的選擇 (1-{max_choice}): ").strip()
                choice = int(choice_str)
                if 1 <= choice <= max_choice:
                    break
                else:
                    print("無效的選擇，請重新輸入。")
            except ValueError:
                print("無效的輸入，請輸入數字。")

        if 1 <= choice <= len(category_counts):
            selected = category_counts[choice - 1][0]
            updates = {"view.category_filter": selected.value}
            logging.info(f"將啟用分類過濾: {selected.value}")
        else:
            option_choice = choice - len(category_counts)
            if option_choice == 1:
                print("\n請輸入搜尋詞 (不分大小寫)。")
                search_term = input("> ").strip()
                if search_term:
                    updates = {"view.search_term": search_term}
                    logging.info(f"將啟用搜尋過濾: '{search_term}'")
            elif option_choice == 2:
                updates = {"force_analysis": True}
                logging.warning("將強制渲染完整圖表。")
            elif option_choice == 3:
                action = "exit"
        return updates, action
