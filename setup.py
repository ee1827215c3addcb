from setuptools import setup

setup(name='csvtable',
      version='0.1.0',
      description='Editable in-memory CSV table with structural edits and aligned rendering',
      packages=['csvtable'],
      python_requires='>=3.8',
      install_requires=[],
      extras_require={
          'test': ['pytest'],
          'bench': ['pandas', 'polars'],
      },
      zip_safe=False)
