__all__ = [
    '__name__',
    '__version__',
    '__author__',
    '__credits__',
    '__license__',
    '__status__',
]


__name__ = 'elfmem'
__version__ = '0.2.0'
__author__ = 'Elfmem Developers'
__credits__ = ['Elfmem Developers']
__license__ = 'MIT'
__status__ = 'Development'
