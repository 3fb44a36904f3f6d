"""setuptools installation script for repgen package"""

from setuptools import setup, find_packages


setup(
	name='repgen',
	version='0.3.0',
	description='Representative genome sets built from protein k-mer signatures.',
	package_dir={'': 'src'},
	packages=find_packages('src'),
	python_requires='>=3.9',
	install_requires=[
		'numpy>=1.20',
		'attrs>=21.3',
		'cattrs>=22.2',
		'biopython>=1.79',
		'click>=8.2',
		'typing-extensions>=4.0',
		'tqdm>=4.50',
	],
	extras_require={
		'test': ['pytest'],
	},
	entry_points={
		'console_scripts': [
			'repgen = repgen.cli:cli',
		],
	},
)
