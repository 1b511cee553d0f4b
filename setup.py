from setuptools import setup, find_packages
from codecs import open
from os import path

VERSION = '0.1.0'

here = path.abspath(path.dirname(__file__))

# Get the long description from the README file
with open(path.join(here, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='pageloader',
    version=VERSION,
    description='Loading-state coordination for PySide6 applications: a shared page loader, component bindings and a first-paint splash',
    long_description=long_description,
    long_description_content_type='text/markdown',
    license='BSD',
    classifiers=[
      'Development Status :: 3 - Alpha',
      'Intended Audience :: Developers',
      'Programming Language :: Python :: 3',
    ],
    keywords='qt pyside6 loader spinner splash',
    packages=find_packages(include=['pageloader', 'pageloader.*']),
    include_package_data=True,
    python_requires='>=3.10',
    install_requires=[
        'PySide6>=6.4.0',
        'pandas>=1.5.0',
        'qt-material>=2.14',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
            'pytest-qt>=4.2',
            'pytest-mock>=3.10',
        ],
    },
)
