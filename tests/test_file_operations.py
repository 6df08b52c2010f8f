"""
Tests for project files, PNG export and restoration diagnostics.

Covers:
- Save/open round trip through the controller
- Project JSON layout (data URLs, nextLayerId)
- Malformed projects rejected without touching the session
- Corrupt layer data dropped while the rest loads
- Layers over the decoder's pixel limit dropped the same way
"""
import json
import pytest
from PIL import Image

from conftest import document_signature
from services import file_operations
from services.state_codec import capture_state, apply_snapshot
from models.document import Document
from models.snapshot import StateSnapshot, LayerSnapshot
from services.surface import Surface
from utils.errors import ProjectFormatError
from controller import EditorController


@pytest.fixture
def project_path(tmp_path):
    return str(tmp_path / "project.json")


def edited(editor):
    editor.add_layer("Sketch")
    editor.active_layer.bitmap.fill_rect((10, 10, 30, 30), "#ff0000")
    editor.active_layer.offset = (12, -4)
    editor.set_layer_opacity(0.5)
    editor.add_layer("Hidden")
    editor.toggle_layer_visibility(3)
    editor.set_active_layer(2)
    return editor


# ══════════════════════════════════════════════════════════════════════════
# Round trip
# ══════════════════════════════════════════════════════════════════════════

class TestProjectRoundTrip:

    def test_save_then_open_restores_document(self, editor, project_path):
        edited(editor)
        before = document_signature(editor.document)
        assert editor.save_project(project_path)

        other = EditorController(10, 10)
        assert other.open_project(project_path)
        assert document_signature(other.document) == before
        assert other.current_path == project_path

    def test_open_resets_history(self, editor, project_path):
        edited(editor).save_project(project_path)
        editor.add_layer()
        assert editor.open_project(project_path)
        assert len(editor.history.undo_stack) == 1
        assert not editor.can_undo()

    def test_ids_continue_after_open(self, editor, project_path):
        editor.add_layer()
        editor.add_layer()
        editor.set_active_layer(3)
        editor.delete_layer()
        editor.save_project(project_path)
        editor.new_canvas(10, 10)
        editor.open_project(project_path)
        editor.add_layer()
        assert editor.active_layer.id == 4

    def test_file_layout(self, editor, project_path):
        edited(editor).save_project(project_path)
        with open(project_path, encoding='utf-8') as f:
            data = json.load(f)
        assert data['width'] == 800 and data['height'] == 600
        assert data['activeLayerId'] == 2
        assert data['nextLayerId'] == 4
        assert [layer['name'] for layer in data['layers']] == ["Background", "Sketch", "Hidden"]
        sketch = data['layers'][1]
        assert (sketch['x'], sketch['y'], sketch['opacity']) == (12, -4, 0.5)
        assert data['layers'][2]['visible'] is False
        assert sketch['imageDataURL'].startswith("data:image/png;base64,")


# ══════════════════════════════════════════════════════════════════════════
# Malformed input
# ══════════════════════════════════════════════════════════════════════════

class TestMalformedProjects:

    @pytest.mark.parametrize("content", [
        "not json",
        "[]",
        '{"width": 10}',
        '{"width": 10, "height": 0, "layers": []}',
        '{"width": 10, "height": 10, "layers": {}}',
        '{"width": 10, "height": 10, "layers": [{"name": "no id"}]}',
        '{"width": 10, "height": 10, "layers": [{"id": 1}, {"id": 1}]}',
    ])
    def test_rejected_without_change(self, editor, tmp_path, content):
        path = tmp_path / "bad.json"
        path.write_text(content, encoding='utf-8')
        before = document_signature(editor.document)
        assert editor.open_project(str(path)) is False
        assert document_signature(editor.document) == before
        assert editor.last_message.startswith("Could not open project")

    def test_missing_file(self, editor, tmp_path):
        assert editor.open_project(str(tmp_path / "missing.json")) is False

    def test_load_project_raises_format_error(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{", encoding='utf-8')
        with pytest.raises(ProjectFormatError):
            file_operations.load_project(str(path))


class TestCorruptLayers:

    def test_corrupt_layer_dropped_others_restored(self, editor, project_path):
        edited(editor).save_project(project_path)
        with open(project_path, encoding='utf-8') as f:
            data = json.load(f)
        data['layers'][1]['imageDataURL'] = "data:image/png;base64,AAAA"
        with open(project_path, 'w', encoding='utf-8') as f:
            json.dump(data, f)

        messages = []
        editor.add_message_listener(messages.append)
        assert editor.open_project(project_path)
        assert [layer.name for layer in editor.layers] == ["Background", "Hidden"]
        assert editor.active_layer.name == "Hidden"
        assert any("Sketch" in message for message in messages)

    def test_oversized_layer_dropped_on_open(self, project_path, monkeypatch):
        editor = EditorController(10, 10)
        editor.add_layer("Huge")
        editor.save_project(project_path)
        with open(project_path, encoding='utf-8') as f:
            data = json.load(f)
        data['layers'][1]['imageDataURL'] = Surface.blank(20, 20).to_data_url()
        with open(project_path, 'w', encoding='utf-8') as f:
            json.dump(data, f)

        # 400 pixels is past twice the limit, where Pillow refuses to decode
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
        messages = []
        editor.add_message_listener(messages.append)
        assert editor.open_project(project_path)
        assert [layer.name for layer in editor.layers] == ["Background"]
        assert any("Huge" in message for message in messages)

    def test_all_layers_corrupt_leaves_blank_background(self):
        document = Document(5, 5)
        snapshot = StateSnapshot(5, 5, 1.0, 1, (
            LayerSnapshot(1, "Broken", 0.0, 0.0, 1.0, True, b"junk"),
        ), 2)
        failures = apply_snapshot(document, snapshot)
        assert len(failures) == 1
        assert failures[0].layer_name == "Broken"
        assert len(document.layers) == 1


# ══════════════════════════════════════════════════════════════════════════
# Snapshots and export
# ══════════════════════════════════════════════════════════════════════════

class TestSnapshots:

    def test_snapshot_is_detached_from_live_bitmap(self, document):
        snapshot = capture_state(document)
        document.layers.active_layer.bitmap.fill_rect((0, 0, 5, 5), "#ff0000")
        restored = Document(1, 1)
        apply_snapshot(restored, snapshot)
        assert restored.layers.active_layer.bitmap.pixel(1, 1) == (0, 0, 0, 0)

    def test_undersized_bitmap_fitted_to_canvas(self):
        snapshot = StateSnapshot(8, 6, 1.0, 1, (
            LayerSnapshot(1, "Small", 0.0, 0.0, 1.0, True, Surface.blank(2, 2).encode()),
        ))
        document = Document(1, 1)
        apply_snapshot(document, snapshot)
        assert document.layers.active_layer.bitmap.size == (8, 6)

    def test_next_layer_id_derived_when_missing(self):
        data = {'width': 4, 'height': 4, 'layers': [
            {'id': 7, 'name': 'Seven', 'imageDataURL': Surface.blank(4, 4).to_data_url()},
        ]}
        snapshot = file_operations.project_dict_to_snapshot(data)
        assert snapshot.next_layer_id == 8
        assert snapshot.active_layer_id is None


class TestExport:

    def test_export_flattens_visible_layers(self, editor, tmp_path):
        edited(editor)
        path = str(tmp_path / "out.png")
        assert editor.export_png(path)
        with Image.open(path) as img:
            assert img.size == (800, 600)
            assert img.mode == "RGBA"
            assert img.getpixel((700, 500)) == (255, 255, 255, 255)

    def test_export_to_bad_path_reports(self, editor, tmp_path):
        assert editor.export_png(str(tmp_path / "missing" / "out.png")) is False
        assert editor.last_message.startswith("Could not export image")
