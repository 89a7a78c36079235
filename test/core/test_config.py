#    test_config.py
#        Test the layered loading of the size report configuration
#
#   - License : MIT - See LICENSE file.
#   - Project :  Elfmem - ELF memory footprint analyzer
#
#   Copyright (c) 2026 Elfmem Developers

import os
import json
import tempfile
from unittest.mock import patch

from elfmem.core import config
from elfmem.core.config import load_config, limits_from_config, get_user_config_file, DEFAULT_CONFIG
from elfmem.core.limits import LimitSet
from elfmem.exceptions import ConfigError
from test import ElfMemUnitTest


class TestConfig(ElfMemUnitTest):

    def setUp(self):
        self.tempdir = tempfile.TemporaryDirectory()
        # Never read the config of the person running the tests
        self.user_dir = os.path.join(self.tempdir.name, 'user')
        os.mkdir(self.user_dir)
        self.appdirs_patch = patch.object(config.appdirs, 'user_config_dir', return_value=self.user_dir)
        self.appdirs_patch.start()

    def tearDown(self):
        self.appdirs_patch.stop()
        self.tempdir.cleanup()

    def write_json(self, name: str, content) -> str:
        path = os.path.join(self.tempdir.name, name)
        with open(path, 'w') as f:
            if isinstance(content, str):
                f.write(content)
            else:
                json.dump(content, f)
        return path

    def test_defaults(self):
        cfg = load_config()
        self.assertEqual(cfg, DEFAULT_CONFIG)
        self.assertIsNot(cfg, DEFAULT_CONFIG)
        self.assertEqual(limits_from_config(cfg), LimitSet())

    def test_defaults_are_not_modified(self):
        cfg = load_config(additional_config={'limits': {'total': '1k'}})
        cfg['limits']['data'] = '5k'
        self.assertIsNone(DEFAULT_CONFIG['limits']['total'])
        self.assertIsNone(DEFAULT_CONFIG['limits']['data'])

    def test_user_config_file(self):
        self.assertEqual(get_user_config_file(), os.path.join(self.user_dir, 'config.json'))
        with open(get_user_config_file(), 'w') as f:
            json.dump({'limits': {'instruction': '32k'}, 'color': 'never'}, f)

        cfg = load_config()
        self.assertEqual(cfg['color'], 'never')
        self.assertEqual(limits_from_config(cfg), LimitSet(instruction=32 * 1024))

        cfg = load_config(use_user_config=False)
        self.assertEqual(cfg, DEFAULT_CONFIG)

    def test_layers(self):
        with open(get_user_config_file(), 'w') as f:
            json.dump({'limits': {'instruction': '32k', 'data': '8k'}, 'show_segments': True}, f)
        config_file = self.write_json('project.json', {'limits': {'data': '16k', 'total': '1M'}, 'fixed_only': True})

        cfg = load_config(config_file=config_file, additional_config={'limits': {'total': '2M'}, 'output_format': 'json'})
        self.assertEqual(limits_from_config(cfg), LimitSet(total=2 * 1024 * 1024, instruction=32 * 1024, data=16 * 1024))
        self.assertTrue(cfg['show_segments'])
        self.assertTrue(cfg['fixed_only'])
        self.assertEqual(cfg['output_format'], 'json')
        self.assertEqual(cfg['color'], 'auto')

    def test_integer_limits(self):
        config_file = self.write_json('project.json', {'limits': {'total': 4096, 'data': None}})
        cfg = load_config(config_file=config_file)
        self.assertEqual(limits_from_config(cfg), LimitSet(total=4096))

    def test_missing_file(self):
        with self.assertRaises(ConfigError):
            load_config(config_file=os.path.join(self.tempdir.name, 'nothing.json'))

    def test_invalid_json(self):
        config_file = self.write_json('bad.json', '{"limits": ')
        with self.assertRaises(ConfigError) as ctx:
            load_config(config_file=config_file)
        self.assertIn(config_file, str(ctx.exception))

        config_file = self.write_json('list.json', [1, 2, 3])
        with self.assertRaises(ConfigError):
            load_config(config_file=config_file)

    def test_invalid_values(self):
        bad_configs = [
            {'limits': 'lots'},
            {'limits': {'total': 1.5}},
            {'limits': {'data': True}},
            {'fixed_only': 'yes'},
            {'show_segments': 1},
            {'color': 'rainbow'},
            {'output_format': 'xml'},
        ]
        for bad_config in bad_configs:
            with self.subTest(config=bad_config):
                with self.assertRaises(ConfigError):
                    load_config(additional_config=bad_config)

    def test_bad_limit_text(self):
        cfg = load_config(additional_config={'limits': {'instruction': '12 apples'}})
        with self.assertRaises(ConfigError) as ctx:
            limits_from_config(cfg)
        self.assertIn('instruction', str(ctx.exception))

        cfg = load_config(additional_config={'limits': {'total': -5}})
        with self.assertRaises(ConfigError):
            limits_from_config(cfg)


if __name__ == '__main__':
    import unittest
    unittest.main()
