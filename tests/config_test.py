import sys
import os
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from config import parse_viewport

def test_parse_viewport():
    assert parse_viewport('1024x768') == (1024, 768)
    assert parse_viewport(' 1280X720 ') == (1280, 720)

@pytest.mark.parametrize('value', ['800', 'axb', '800x600x2', '', '0x600', '800x-1'])
def test_malformed_viewport_rejected(value):
    with pytest.raises(ValueError, match='VISUAL_DIFF_VIEWPORT'):
        parse_viewport(value)
