from setuptools import setup

setup(
    name='knue-shortlink',
    version='1.0',
    description='Reversible short links for the KNUE bulletin-board system.',
    python_requires='>=3.10',
    py_modules=[
        'app',
        'config',
        'core_logic',
        'encoding',
        'messages',
        'models',
        'schemas',
        'sites',
        'validation',
    ],
    install_requires=[
        'pydantic>=2.0',
        'pydantic-settings>=2.0',
        'sqids>=0.4',
        'qrcode[pil]>=7.4',
        'validators>=0.21',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    entry_points={
        'console_scripts': ['knue-shortlink=app:main'],
    },
)
