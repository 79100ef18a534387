from setuptools import setup, find_packages

setup(
    name='transcript-analyzer',
    version='1.0.0',
    packages=find_packages(exclude=('tests', 'tests.*')),
    include_package_data=True,
    package_data={
        'transcript_analyzer.lexical': ['wordlists/*.txt'],
    },
    python_requires='>=3.11',
    install_requires=[
        'colored==2.2.3',
        'halo==0.0.31',
        'python-dotenv>=1.0.0',
        'requests>=2.31.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.4',
        ],
    },
    entry_points='''
        [console_scripts]
        transcript-analyzer=transcript_analyzer.__main__:main
    ''',
    license='MIT',
    keywords='transcript analysis weasel words hedge filler sentiment',
    description='Speaker-level lexical and semantic analysis of subtitle transcripts',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
)
