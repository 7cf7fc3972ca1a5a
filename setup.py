try:
    from setuptools import setup
except ImportError:
    from distutils.core import setup

tests_require = ['pytest']

long_description = """
perfio measures TCP and UDP throughput between a client and a server,
in the manner of iperf, using curio tasks for the parallel streams.
"""


setup(name="perfio",
      description="perfio",
      long_description=long_description,
      license="BSD",
      version="0.1",
      packages=['perfio'],
      install_requires=['curio>=1.5'],
      tests_require=tests_require,
      extras_require={
          'test': tests_require,
      },
      python_requires='>= 3.7',
      entry_points={"console_scripts": ["perfio = perfio.__main__:main"]},
      classifiers=[
          'Programming Language :: Python :: 3',
      ])
