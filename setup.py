from setuptools import setup, find_packages

setup(
    name="critical-css-transformer",
    version="1.0.0",
    packages=find_packages(exclude=['critical_css.tests']),
    install_requires=[
        'cssutils',
        'csscompressor',
        'orjson',
        'typing-extensions>=4.10'
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov'
        ]
    },
    entry_points={
        'console_scripts': [
            'critical-css=critical_css.cli:main'
        ]
    },
    python_requires='>=3.8',
    description="Filter and merge critical CSS collected from several page states",
    long_description=open('README.md').read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
