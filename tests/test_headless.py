"""
Tests for the headless command line.

Covers:
- Creating, inspecting and exporting projects
- Canvas commands applied to project files
- Invalid numeric input rejected by argument parsing (exit status 2)
- Unreadable projects (exit status 1)
"""
import json
import os
import pytest
from PIL import Image

import headless


def read_project(path):
    with open(path, encoding='utf-8') as f:
        return json.load(f)


@pytest.fixture
def project(tmp_path):
    path = str(tmp_path / "poster.json")
    headless.main(['new', path, '--width', '120', '--height', '80'])
    return path


class TestHeadlessCommands:

    def test_new(self, project):
        data = read_project(project)
        assert (data['width'], data['height']) == (120, 80)
        assert [layer['name'] for layer in data['layers']] == ["Background"]

    def test_info(self, project, capsys):
        headless.main(['info', project])
        out = capsys.readouterr().out
        assert "Canvas: 120x80" in out
        assert "Background" in out

    def test_resize_to_output(self, project, tmp_path):
        output = str(tmp_path / "small.json")
        headless.main(['resize', project, '60', '40', '-o', output])
        assert (read_project(output)['width'], read_project(output)['height']) == (60, 40)
        assert read_project(project)['width'] == 120

    def test_crop(self, project):
        headless.main(['crop', project, '10', '10', '50', '30'])
        data = read_project(project)
        assert (data['width'], data['height']) == (50, 30)

    def test_add_layer_from_image(self, project, tmp_path):
        image = str(tmp_path / "dot.png")
        Image.new("RGBA", (5, 5), (255, 0, 0, 255)).save(image)
        headless.main(['add-layer', project, '--image', image])
        data = read_project(project)
        assert [layer['name'] for layer in data['layers']] == ["Background", "dot.png"]

    def test_scale_layer(self, project):
        headless.main(['scale-layer', project, '50', '--layer', '1'])
        assert read_project(project)['width'] == 120

    def test_export(self, project, tmp_path):
        output = str(tmp_path / "poster.png")
        headless.main(['export', project, output])
        with Image.open(output) as img:
            assert img.size == (120, 80)


class TestHeadlessErrors:

    @pytest.mark.parametrize("argv", [
        ['new', 'x.json', '--width', '0'],
        ['new', 'x.json', '--height', 'tall'],
        ['resize', 'x.json', '-5', '10'],
        ['scale-layer', 'x.json', 'nan'],
        ['crop', 'x.json', 'left', '0', '10', '10'],
    ])
    def test_invalid_numbers_exit_2(self, argv):
        with pytest.raises(SystemExit) as exc:
            headless.main(argv)
        assert exc.value.code == 2

    def test_missing_project_exit_1(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            headless.main(['info', str(tmp_path / "nope.json")])
        assert exc.value.code == 1
        assert "Could not open project" in capsys.readouterr().out

    def test_unknown_layer_exit_1(self, project):
        with pytest.raises(SystemExit) as exc:
            headless.main(['scale-layer', project, '50', '--layer', '9'])
        assert exc.value.code == 1
        assert os.path.exists(project)
