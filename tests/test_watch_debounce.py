"""
Watch Mode / ChangeHandler debounce 單元測試
不需要真實檔案系統事件，用 mock event 物件測試過濾與防抖邏輯。
"""
import os
import time
from unittest.mock import MagicMock

from figma_react.cli import ChangeHandler


TARGET = os.path.abspath("/designs/kit.json")


# ─── helper: 建立假 FileModifiedEvent ────────────────────────────────────────

def make_event(src_path: str, is_directory: bool = False):
    ev = MagicMock()
    ev.is_directory = is_directory
    ev.src_path = src_path
    return ev


# ─── ChangeHandler 過濾邏輯 ─────────────────────────────────────────────────

class TestChangeHandlerFilter:
    """測試 on_modified 的過濾條件：目錄、其他檔案、目標檔案。"""

    def setup_method(self):
        self.callback = MagicMock()
        self.handler = ChangeHandler(self.callback, TARGET, debounce=0.0)

    def test_directory_event_ignored(self):
        self.handler.on_modified(make_event("/designs", is_directory=True))
        self.callback.assert_not_called()

    def test_other_file_ignored(self):
        for name in ["other.json", "kit.json.swp", "kit.png"]:
            self.handler.on_modified(make_event(os.path.join("/designs", name)))
        self.callback.assert_not_called()

    def test_target_file_triggers_callback(self):
        self.handler.on_modified(make_event(TARGET))
        self.callback.assert_called_once_with()

    def test_unnormalized_event_path(self):
        self.handler.on_modified(make_event("/designs/sub/../kit.json"))
        self.callback.assert_called_once()

    def test_created_event_triggers_callback(self):
        # 編輯器「寫入暫存檔再改名」時只會收到 created
        self.handler.on_created(make_event(TARGET))
        self.callback.assert_called_once()


# ─── debounce ───────────────────────────────────────────────────────────────

class TestChangeHandlerDebounce:
    def test_rapid_events_trigger_once(self):
        callback = MagicMock()
        handler = ChangeHandler(callback, TARGET, debounce=10.0)
        for _ in range(5):
            handler.on_modified(make_event(TARGET))
        assert callback.call_count == 1

    def test_event_after_window_triggers_again(self):
        callback = MagicMock()
        handler = ChangeHandler(callback, TARGET, debounce=10.0)
        handler.on_modified(make_event(TARGET))
        handler.last_trigger = time.time() - 11
        handler.on_modified(make_event(TARGET))
        assert callback.call_count == 2

    def test_last_trigger_updated(self):
        handler = ChangeHandler(MagicMock(), TARGET, debounce=1.0)
        assert handler.last_trigger == 0.0
        before = time.time()
        handler.on_modified(make_event(TARGET))
        assert handler.last_trigger >= before

    def test_ignored_event_does_not_reset_window(self):
        handler = ChangeHandler(MagicMock(), TARGET, debounce=1.0)
        handler.on_modified(make_event("/designs/other.json"))
        assert handler.last_trigger == 0.0
