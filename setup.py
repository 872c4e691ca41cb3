from setuptools import setup, find_packages
setup(
    name='themepack',
    version='0.1.0',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    include_package_data=True,
    package_data={
        'themepack': [
            'build/config/*.yaml',
        ],
    },
    description='Build, fingerprint, package and deploy WordPress themes.',
    author='Your Name',
    author_email='youremail@example.com',
    python_requires='>=3.8',
    install_requires=[
        'invoke>=2.0.0',
        'pyyaml>=6.0',
        'pydantic>=2.0.0',
        'rjsmin>=1.2.0',
        'rcssmin>=1.1.0',
        'livereload>=2.6.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'themepack = themepack.cli:program.run',
        ],
    },
)
