from streamlit.testing.v1 import AppTest

from session_state_keys import SESSION_CORRELOGRAM_RESULTS, SESSION_CURRENT_DATA


def test_page_without_data_asks_for_upload():
    at = AppTest.from_file("../correlogram_page.py", default_timeout=30)
    at.run()

    assert not at.exception
    assert any("Upload a dataset" in info.value for info in at.info)


def test_page_renders_correlogram_for_loaded_data(sample_data):
    at = AppTest.from_file("../correlogram_page.py", default_timeout=30)
    at.session_state[SESSION_CURRENT_DATA] = sample_data
    at.run()

    assert not at.exception
    assert len(at.error) == 0
    result = at.session_state[SESSION_CORRELOGRAM_RESULTS]
    # X, Y, Z and const are numeric; const pairs are dropped
    assert len(result['cells']) == 6
