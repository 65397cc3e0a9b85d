# src/archview/__init__.py
"""
ArchView：程式碼視覺化客戶端的結構轉換層。

- 將扁平的路徑清單重建為階層式檔案樹。
- 將架構模型依檢視設定投影為已過濾、已上色的節點/邊圖。
"""

__version__ = "0.1.0"
