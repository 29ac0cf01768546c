import os
import re

from setuptools import setup


def get_version():
    module_init = 'colormgr/version.py'

    if not os.path.isfile(module_init):
        module_init = '../' + module_init
        if not os.path.isfile(module_init):
            raise ValueError('Unable to determine version!')

    with open(module_init) as version_file:
        return re.search(r'__version__\s*=\s*[\'"]([^\'"]*)[\'"]',
                         version_file.read()).group(1)


setup(name='colormgr',
      version=get_version(),
      description='Asyncio client for the colord color management daemon',
      license='LGPL',
      platforms='Linux',
      packages=['colormgr'],
      python_requires='>=3.10',
      install_requires=['colorlog', 'dbus-fast', 'frozendict', 'wrapt'],
      extras_require={
          'test': ['pytest'],
      },
      keywords='colord color management icc profile dbus asyncio',
      include_package_data=True,
      setup_requires=['setuptools>=18.0'],
      zip_safe=False,
      classifiers=[
          'Development Status :: 3 - Alpha',
          'Framework :: AsyncIO',
          'Intended Audience :: Developers',
          'License :: OSI Approved :: GNU Lesser General Public License v3 (LGPLv3)',
          'Operating System :: POSIX :: Linux',
          'Programming Language :: Python :: 3 :: Only',
          'Topic :: Multimedia :: Graphics',
          'Topic :: Software Development :: Libraries'
      ])
