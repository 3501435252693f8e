"""Tests for page helpers that keep state across reruns."""

from unittest.mock import patch

from src.viz.layout import flash, show_flash


class TestFlash:
    @patch("src.viz.layout.st")
    def test_message_survives_until_shown(self, mock_st):
        mock_st.session_state = {}

        flash("Saved. Status is now Complete.")
        mock_st.success.assert_not_called()

        # Next run of the page after st.rerun()
        show_flash()
        mock_st.success.assert_called_once_with("Saved. Status is now Complete.")

    @patch("src.viz.layout.st")
    def test_shown_once(self, mock_st):
        mock_st.session_state = {}
        flash("Saved.")
        show_flash()
        show_flash()
        assert mock_st.success.call_count == 1

    @patch("src.viz.layout.st")
    def test_nothing_to_show(self, mock_st):
        mock_st.session_state = {}
        show_flash()
        mock_st.success.assert_not_called()
