"""pyHueHue setup script."""

from setuptools import setup, find_packages

CONST_DESC = 'Lightweight Python module to discover and control Hue lights'


setup(name='pyhuehue',
      version='0.1.0',
      description=CONST_DESC,
      long_description=open('README.rst').read(),
      license='MIT',
      python_requires='>=3.8',
      install_requires=[
          'click>=7.0',
          'colorlog>=4.0',
          'ifaddr>=0.1.0',
          'requests>=2.0',
          'urllib3>=2.0',
          'zeroconf>=0.38',
      ],
      extras_require={'test': ['pytest', 'hypothesis']},
      packages=find_packages(exclude=['tests', 'tests.*']),
      package_data={'pyhuehue': ['hue_root_ca.pem']},
      entry_points={
          'console_scripts': ['huehue=pyhuehue.cli:cli'],
      },
      zip_safe=False,
      classifiers=[
          "Programming Language :: Python :: 3",
          "License :: OSI Approved :: MIT License",
          "Operating System :: OS Independent",
          "Topic :: Home Automation"])
