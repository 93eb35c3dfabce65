def surrogatepass(code):
    return code.encode('utf-16', 'surrogatepass').decode('utf-16')

# Speed
activity   = '⇅'
arrow_down = '↓'
arrow_up   = '↑'
sigma      = '∑'

# Alerts
md_alert = surrogatepass('󰀦')
