"""Configuration management module."""
import json
import os
import logging
from typing import Dict

from tvdbclient.auth import DEFAULT_BASE_URL
from tvdbclient.transport import DEFAULT_RETRY_METHODS, DEFAULT_RETRY_STATUS_CODES, Transport

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = "~/.config/tvdbclient"


class Config:
    def __init__(self, config_dir: str = DEFAULT_CONFIG_DIR):
        self.config_dir = os.path.expanduser(config_dir)
        self.config_files = {
            'settings': 'settings.json'
        }
        self._ensure_config_dir()
        self._load_configs()

    def _ensure_config_dir(self):
        """Ensure configuration directory exists."""
        os.makedirs(self.config_dir, exist_ok=True)

    def _load_configs(self):
        """Load all configuration files."""
        settings = self._default_settings()
        settings.update(self._load_file('settings', self._default_settings()))
        if os.getenv('TVDB_BASE_URL'):
            settings['base_url'] = os.getenv('TVDB_BASE_URL')
        self.settings = settings

    def _load_file(self, config_type: str, default_data: Dict) -> Dict:
        """Load a specific configuration file."""
        file_path = os.path.join(self.config_dir, self.config_files[config_type])
        if os.path.exists(file_path):
            with open(file_path, 'r', encoding='utf-8') as f:
                return json.load(f)
        else:
            self._save_file(config_type, default_data)
            return default_data

    def _save_file(self, config_type: str, data: Dict):
        """Save data to a configuration file."""
        file_path = os.path.join(self.config_dir, self.config_files[config_type])
        with open(file_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    @property
    def base_url(self) -> str:
        return self.settings['base_url'].rstrip('/')

    def create_transport(self) -> Transport:
        """Build a transport from the retry and timeout settings."""
        return Transport(
            retry_max=self.settings['retry_max'],
            retry_wait_min=self.settings['retry_wait_min'],
            retry_wait_max=self.settings['retry_wait_max'],
            retry_status_codes=self.settings['retry_status_codes'],
            retry_methods=self.settings['retry_methods'],
            timeout=self.settings['timeout']
        )

    def _default_settings(self) -> Dict:
        return {
            "base_url": DEFAULT_BASE_URL,
            "timeout": 30,
            "retry_max": 3,
            "retry_wait_min": 1,
            "retry_wait_max": 5,
            "retry_status_codes": list(DEFAULT_RETRY_STATUS_CODES),
            "retry_methods": list(DEFAULT_RETRY_METHODS)
        }
