'''Formats of music ripped from game consoles and home computers: the file
contains the original sound driver, and the readers here only look at the
metadata around it.'''
