from setuptools import setup, find_packages

setup(name='prrt_planning',
      version='0.1',
      description='Package containing a multithreaded parallel RRT motion planner and its planning interfaces.',
      license='',
      package_dir={'': 'src'},
      packages=find_packages(where='src'),
      python_requires='>=3.7',
      install_requires=["numpy", "scikit-learn", "python-igraph"],
      extras_require={"plot": ["matplotlib"], "test": ["pytest"]},
      include_package_data=True)
