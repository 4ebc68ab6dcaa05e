import base64
import json

import pytest


def make_entry(url, text=None, encoding=None):
    content = {'mimeType': 'text/html', 'size': len(text or '')}
    if text is not None:
        content['text'] = text
    if encoding is not None:
        content['encoding'] = encoding
    return {
        'request': {'method': 'GET', 'url': url, 'headers': []},
        'response': {'status': 200, 'content': content},
    }


def make_har(*entries):
    return {
        'log': {
            'version': '1.2',
            'creator': {'name': 'test', 'version': '1.0'},
            'entries': list(entries),
        }
    }


@pytest.fixture
def write_har(tmp_path):
    input_dir = tmp_path / 'input'
    input_dir.mkdir()

    def _write(name, har_data):
        path = input_dir / name
        if isinstance(har_data, str):
            path.write_text(har_data, encoding='utf-8')
        else:
            path.write_text(json.dumps(har_data), encoding='utf-8')
        return path

    return _write


@pytest.fixture
def b64():
    return lambda data: base64.b64encode(data).decode('ascii')
