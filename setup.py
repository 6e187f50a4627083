from setuptools import setup, find_packages

with open('requirements.txt') as f:
    required = f.read().splitlines()

setup(
    name = 'confcache',
    version = '0.1.0',
    description = 'Lazily loaded, thread-safe cache of JSON, HOCON and YAML configuration files',
    packages = find_packages(exclude=['test', 'test.*']),
    python_requires = '>=3.10',
    install_requires = required,
    extras_require = {
        'test': ['pytest>=7.0', 'pytest-cov>=4.0']
    }
)
