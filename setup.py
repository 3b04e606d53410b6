from setuptools import setup, find_packages


setup(
    name='blueprint-viewer',
    version='0.1.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    py_modules=['blueprint_app'],
    python_requires='>=3.10',
    install_requires=[
        'click',
        'pydantic>=2',
        'python-dotenv>=0.19.0',
        'rich',
        'textual>=0.86',
    ],
    extras_require={
        'syntax': ['textual[syntax]'],
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'blueprint=blueprint_cli.cli:main'
        ],
    }
)
