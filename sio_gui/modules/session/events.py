# Central event names used by the connector, SessionManager, EventLog and DraftComposer

# connector bus (raw transport traffic)
EVT_INBOUND_RAW       = "inbound.raw"           # {event_name, args}
EVT_CHANNEL_STATUS    = "channel.status"        # {status, sid}

# session bus
EVT_INBOUND_MESSAGE   = "inbound.message"       # {event_name, args}
EVT_CONN_STATUS       = "connection.status"     # {state}

# log / draft buses
EVT_LOG_APPENDED      = "log.appended"          # {entry}
EVT_LOG_CLEARED       = "log.cleared"           # {}
EVT_DRAFT_CHANGED     = "draft.changed"         # {draft}

STATUS_CONNECTED      = "connected"
STATUS_DISCONNECTED   = "disconnected"
STATUS_CLOSED         = "closed"
