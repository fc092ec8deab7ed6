{'config-search-paths': ['{:user-config-path}/pidlib/config.yaml',],
 'auth-variables': {
     'pid-protocol': {
         'default': 'doi',
         'environment-variables': 'PIDLIB_PROTOCOL'},
     'pid-authority': {
         'environment-variables': 'PIDLIB_AUTHORITY'},
     'pid-shoulder': {
         'environment-variables': 'PIDLIB_SHOULDER'},
     'identifier-generation-style': {
         'default': 'random-string',
         'environment-variables': 'PIDLIB_IDENTIFIER_GENERATION_STYLE'},
     'datafile-pid-format': {
         'default': 'DEPENDENT',
         'environment-variables': 'PIDLIB_DATAFILE_PID_FORMAT'},
     'site-url': {
         'environment-variables': 'PIDLIB_SITE_URL'},
     'publisher': {
         'environment-variables': 'PIDLIB_PUBLISHER'},
     'registry-api': {
         'environment-variables': 'PIDLIB_REGISTRY_API'},
     'registry-timeout': {
         'default': 10,
         'environment-variables': 'PIDLIB_REGISTRY_TIMEOUT'},}}
