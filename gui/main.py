from nicegui import ui
from pathlib import Path
from typing import Any, Dict, Optional

from adapters import create_default_registry
from core.canonical_models import ConversionResult, Dialect
from core.errors import ConversionError
from core.orchestrator import ConversionOrchestrator

INCLUSION_MODES = ['', 'always', 'fileMatch', 'manual']
ALWAYS_APPLY_CHOICES = {'': None, 'true': True, 'false': False}


class ConverterApp:
    def __init__(self):
        self.registry = create_default_registry()
        self.orchestrator = ConversionOrchestrator(self.registry)

        # UI Elements (to be initialized in setup_ui)
        self.source_text = None
        self.source_format = None
        self.target_format = None
        self.always_apply = None
        self.globs = None
        self.apply_to = None
        self.inclusion = None
        self.file_match_pattern = None
        self.description = None
        self.project = None
        self.output_text = None
        self.score_label = None
        self.lossy_label = None
        self.filename_label = None
        self.log_area = None

    def setup_ui(self):
        with ui.header().classes('bg-primary text-white'):
            ui.label('Agent Config Converter').classes('text-h6')

        with ui.column().classes('w-full p-4 gap-4'):
            # Source
            with ui.card().classes('w-full'):
                with ui.row().classes('w-full items-center'):
                    ui.label('Source').classes('text-lg font-bold flex-grow')
                    ui.button('Load File', icon='folder_open', on_click=self.load_file)
                self.source_text = ui.textarea(placeholder='Paste a rule, agent or instructions file') \
                    .classes('w-full font-mono').props('rows=14')

            # Formats and options
            with ui.card().classes('w-full'):
                ui.label('Conversion').classes('text-lg font-bold')
                with ui.row().classes('w-full gap-4'):
                    self.source_format = ui.select(Dialect.names(), label='Source Format', value='cursor').classes('w-1/4')
                    self.target_format = ui.select(Dialect.names(), label='Target Format', value='claude').classes('w-1/4')

                with ui.row().classes('w-full gap-4'):
                    self.always_apply = ui.select(list(ALWAYS_APPLY_CHOICES.keys()), label='alwaysApply (Cursor)', value='').classes('w-1/6')
                    self.globs = ui.input('Globs (Cursor)').classes('w-1/4')
                    self.apply_to = ui.input('applyTo (Copilot)').classes('w-1/4')
                with ui.row().classes('w-full gap-4'):
                    self.inclusion = ui.select(INCLUSION_MODES, label='Inclusion (Kiro)', value='').classes('w-1/6')
                    self.file_match_pattern = ui.input('fileMatchPattern (Kiro)').classes('w-1/4')
                    self.description = ui.input('Description (Claude skill)').classes('w-1/4')
                    self.project = ui.input('Project (AGENTS.md)').classes('w-1/6')

            # Actions
            with ui.row().classes('w-full gap-4'):
                ui.button('Convert', icon='sync', on_click=self.run_conversion).classes('bg-primary text-white')

            # Result
            with ui.card().classes('w-full'):
                with ui.row().classes('w-full gap-8'):
                    self.filename_label = ui.label('File: -')
                    self.score_label = ui.label('Score: -')
                    self.lossy_label = ui.label('Lossy: -')
                self.output_text = ui.textarea().classes('w-full font-mono').props('rows=14 readonly')

            # Warnings
            with ui.card().classes('w-full'):
                ui.label('Warnings').classes('text-lg font-bold')
                self.log_area = ui.log().classes('w-full h-48 font-mono bg-gray-100 p-2 rounded')

    def collect_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            'always_apply': ALWAYS_APPLY_CHOICES.get(self.always_apply.value or ''),
            'globs': self.globs.value,
            'apply_to': self.apply_to.value,
            'inclusion': self.inclusion.value,
            'file_match_pattern': self.file_match_pattern.value,
            'description': self.description.value,
            'project': self.project.value,
        }
        return {key: value for key, value in options.items() if value not in (None, '')}

    async def load_file(self):
        result = await LocalFilePicker(directory='.', show_hidden_files=True)
        if not result:
            return
        path = Path(result[0])
        try:
            self.source_text.set_value(path.read_text(encoding='utf-8'))
        except (OSError, UnicodeDecodeError) as e:
            ui.notify(f'Could not read {path}: {e}', type='negative')
            return
        adapter = self.registry.detect_format(path)
        if adapter:
            self.source_format.set_value(adapter.format_name)

    def run_conversion(self):
        if not self.source_text.value:
            ui.notify('Please paste or load source content.', type='negative')
            return
        self.log_area.clear()
        try:
            result = self.orchestrator.convert(
                self.source_text.value, self.source_format.value, self.target_format.value,
                options=self.collect_options(),
            )
        except ConversionError as e:
            self.show_result(None)
            self.log_area.push(f"Error: {e}")
            ui.notify(str(e), type='negative')
            return
        self.show_result(result)

    def show_result(self, result: Optional[ConversionResult]):
        if result is None:
            self.output_text.set_value('')
            self.filename_label.set_text('File: -')
            self.score_label.set_text('Score: -')
            self.lossy_label.set_text('Lossy: -')
            return
        self.output_text.set_value(result.content)
        self.filename_label.set_text(f'File: {result.filename or "-"}')
        self.score_label.set_text(f'Score: {result.quality_score}')
        self.lossy_label.set_text(f'Lossy: {"yes" if result.lossy_conversion else "no"}')
        for warning in result.warnings:
            self.log_area.push(warning)


class LocalFilePicker(ui.dialog):
    def __init__(self, directory: str, show_hidden_files: bool = False):
        super().__init__()
        self.path = Path(directory).expanduser()
        if not self.path.exists(): self.path = Path('.')
        self.show_hidden_files = show_hidden_files
        with self, ui.card():
            self.grid = ui.aggrid({
                'columnDefs': [{'field': 'name', 'headerName': 'File', 'sortable': True}],
                'rowSelection': 'single',
            }, html_columns=[0]).classes('w-96').on('cellDoubleClicked', self.handle_double_click)
            with ui.row().classes('w-full justify-end'):
                ui.button('Cancel', on_click=self.close).props('outline')
        self.update_grid()

    def update_grid(self):
        paths = list(self.path.glob('*'))
        if not self.show_hidden_files: paths = [p for p in paths if not p.name.startswith('.')]
        paths.sort(key=lambda p: (not p.is_dir(), p.name.lower()))
        rows = []
        if self.path.parent != self.path:
            rows.append({'name': '📁 ..', 'path': str(self.path.parent), 'is_dir': True})
        for p in paths:
            icon = '📁' if p.is_dir() else '📄'
            rows.append({'name': f'{icon} {p.name}', 'path': str(p), 'is_dir': p.is_dir()})
        self.grid.options['rowData'] = rows
        self.grid.update()

    def handle_double_click(self, e):
        data = e.args['data']
        if data['is_dir']:
            self.path = Path(data['path'])
            self.update_grid()
        else:
            self.submit([data['path']])


# Use a decorator to explicitly define the root page
@ui.page('/')
def main_page():
    app_instance = ConverterApp()
    app_instance.setup_ui()


def start():
    # reload=False is critical to avoid re-running the script in complex entry points
    ui.run(title='Agent Config Converter', reload=False, port=8080, show=False)


if __name__ in {"__main__", "__mp_main__"}:
    start()
