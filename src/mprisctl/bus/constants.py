"""D-Bus names, paths and members used by the MPRIS interfaces."""

PROPERTIES_INTERFACE = "org.freedesktop.DBus.Properties"

MPRIS_PREFIX = "org.mpris.MediaPlayer2."
MPRIS_PATH = "/org/mpris/MediaPlayer2"
ROOT_INTERFACE = "org.mpris.MediaPlayer2"
PLAYER_INTERFACE = "org.mpris.MediaPlayer2.Player"
TRACK_LIST_INTERFACE = "org.mpris.MediaPlayer2.TrackList"

# Passed as after_track to AddTrack to insert at the start of the list
NO_TRACK = "/org/mpris/MediaPlayer2/TrackList/NoTrack"

LOOP_STATUSES = ("None", "Track", "Playlist")
