"""
Versioned JSON saves for a game state.

A save file holds an envelope ``{version, timestamp, data}`` where ``data``
is ``GameState.serialize()``. Only saves written with the exact current
version are accepted. Every operation reports a result dict instead of
raising, so callers can always show a message.
"""

import json
import logging
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional

from celedog.config import GameConfig
from celedog.state.game_state import GameState
from celedog.utils.helpers import now_ms, time_ago

logger = logging.getLogger(__name__)


class SaveSystem:
    def __init__(self, save_path: Optional[str] = None, config: Optional[GameConfig] = None):
        self.config = config or GameConfig.get_instance()
        self.save_path = Path(save_path or self.config.SAVE_PATH)

    @property
    def backup_prefix(self) -> str:
        return f"{self.save_path.stem}_backup_"

    def save_game(self, state: Optional[GameState]) -> Dict[str, Any]:
        if state is None:
            return {'success': False, 'message': 'No game state to save'}

        save_object = {
            'version': self.config.SAVE_VERSION,
            'timestamp': now_ms(),
            'data': state.serialize()
        }

        try:
            json_string = json.dumps(save_object)
        except (TypeError, ValueError) as e:
            logger.error("Save failed, state is not serializable: %s", e)
            return {'success': False, 'message': f"Save failed: {e}"}

        size_in_bytes = len(json_string.encode('utf-8'))
        if size_in_bytes > self.config.MAX_SAVE_BYTES:
            return {'success': False, 'message': 'Save data too large. Consider clearing old data.'}

        try:
            self.save_path.parent.mkdir(parents=True, exist_ok=True)
            self.save_path.write_text(json_string, encoding='utf-8')
        except OSError as e:
            logger.error("Save failed: %s", e)
            return {'success': False, 'message': f"Save failed: {e}"}

        logger.info("Game saved to %s (%d bytes)", self.save_path, size_in_bytes)
        return {'success': True, 'message': 'Game saved successfully', 'size': size_in_bytes}

    def _read(self, path: Path) -> Dict[str, Any]:
        return json.loads(path.read_text(encoding='utf-8'))

    def load_game(self) -> Dict[str, Any]:
        if not self.has_save_data():
            return {'success': False, 'game_state': None, 'message': 'No save data found'}

        try:
            save_object = self._read(self.save_path)
        except (OSError, ValueError) as e:
            logger.error("Load failed: %s", e)
            return {'success': False, 'game_state': None, 'message': f"Load failed: {e}"}

        validation = self.validate_save(save_object)
        if not validation['valid']:
            return {'success': False, 'game_state': None, 'message': validation['message']}

        try:
            state = GameState.deserialize(save_object['data'], config=self.config)
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Load failed, corrupt save data: %s", e)
            return {'success': False, 'game_state': None, 'message': f"Load failed: {e}"}

        return {
            'success': True,
            'game_state': state,
            'message': 'Game loaded successfully',
            'timestamp': save_object['timestamp']
        }

    def has_save_data(self) -> bool:
        return self.save_path.exists()

    def delete_save(self) -> Dict[str, Any]:
        try:
            self.save_path.unlink(missing_ok=True)
        except OSError as e:
            return {'success': False, 'message': f"Delete failed: {e}"}
        return {'success': True, 'message': 'Save data deleted'}

    def get_save_metadata(self) -> Optional[Dict[str, Any]]:
        """Summary of the save file without building a game state."""
        if not self.has_save_data():
            return None
        try:
            save_object = self._read(self.save_path)
        except (OSError, ValueError) as e:
            logger.warning("Failed to read save metadata: %s", e)
            return None

        data = save_object.get('data') or {}
        return {
            'version': save_object.get('version'),
            'timestamp': save_object.get('timestamp'),
            'saved_ago': time_ago(save_object['timestamp']) if save_object.get('timestamp') else None,
            'dog_count': len(data.get('dogs', [])),
            'gold': data.get('player', {}).get('gold', 0),
            'generation': data.get('stats', {}).get('highest_generation', 0)
        }

    def validate_save(self, save_object: Any) -> Dict[str, Any]:
        if not isinstance(save_object, dict):
            return {'valid': False, 'message': 'Invalid save data structure'}

        if not save_object.get('version'):
            return {'valid': False, 'message': 'Save data missing version'}

        if not self.is_version_compatible(save_object['version']):
            return {'valid': False, 'message': f"Incompatible save version: {save_object['version']}"}

        data = save_object.get('data')
        if not isinstance(data, dict) or 'player' not in data or 'dogs' not in data:
            return {'valid': False, 'message': 'Save data missing required fields'}

        return {'valid': True, 'message': 'Save data valid'}

    def is_version_compatible(self, save_version: str) -> bool:
        # TODO: migrate 1.x saves once a second save version exists
        return save_version == self.config.SAVE_VERSION

    def export_save(self, destination: str) -> Dict[str, Any]:
        if not self.has_save_data():
            return {'success': False, 'message': 'No save data to export'}
        try:
            shutil.copyfile(self.save_path, destination)
        except OSError as e:
            return {'success': False, 'message': f"Export failed: {e}"}
        return {'success': True, 'message': 'Save exported successfully'}

    def import_save(self, source: str) -> Dict[str, Any]:
        try:
            text = Path(source).read_text(encoding='utf-8')
            save_object = json.loads(text)
        except (OSError, ValueError) as e:
            return {'success': False, 'message': f"Import failed: {e}"}

        validation = self.validate_save(save_object)
        if not validation['valid']:
            return {'success': False, 'message': validation['message']}

        try:
            self.save_path.write_text(text, encoding='utf-8')
        except OSError as e:
            return {'success': False, 'message': f"Import failed: {e}"}
        return {'success': True, 'message': 'Save imported successfully'}

    def create_backup(self) -> Dict[str, Any]:
        if not self.has_save_data():
            return {'success': False, 'message': 'No save data to backup'}

        backup_path = self.save_path.with_name(f"{self.backup_prefix}{now_ms()}{self.save_path.suffix}")
        try:
            shutil.copyfile(self.save_path, backup_path)
        except OSError as e:
            return {'success': False, 'message': f"Backup failed: {e}"}
        return {'success': True, 'message': 'Backup created successfully', 'backup_path': str(backup_path)}

    def list_backups(self) -> List[Dict[str, Any]]:
        """Backups next to the save file, newest first."""
        backups = []
        pattern = f"{self.backup_prefix}*{self.save_path.suffix}"

        for path in self.save_path.parent.glob(pattern):
            timestamp_str = path.stem[len(self.backup_prefix):]
            if not timestamp_str.isdigit():
                continue
            try:
                data = self._read(path).get('data') or {}
            except (OSError, ValueError) as e:
                logger.warning("Failed to parse backup %s: %s", path, e)
                continue
            backups.append({
                'path': str(path),
                'timestamp': int(timestamp_str),
                'metadata': {
                    'dog_count': len(data.get('dogs', [])),
                    'gold': data.get('player', {}).get('gold', 0)
                }
            })

        return sorted(backups, key=lambda b: b['timestamp'], reverse=True)
