'''Module formats produced by music trackers: the header describes the
song (name, orders, instruments and samples) and the readers here decode it
without touching the sample data.'''
