from setuptools import setup, find_packages

setup(
    name="icsgen",
    version="0.1.0",
    description="Generate iCalendar (.ics) documents from event data",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        'icalendar>=5.0.0',
        'python-dateutil>=2.8.1',
        'dateparser>=1.1.0',
        'charset-normalizer>=3.0.0',
        'PyYAML>=6.0',
        'typing_extensions>=4.0.0'
    ],
    extras_require={
        'test': [
            'pytest>=7.0.0'
        ]
    }
)
