import os, sys, time
import boto3
from botocore.exceptions import BotoCoreError, ClientError

def load_config(path='config.txt'):
    cfg = {}
    if os.path.exists(path):
        with open(path, 'r') as f:
            for line in f:
                line=line.strip()
                if not line or line.startswith('#') or '=' not in line:
                    continue
                k,v = line.split('=',1)
                cfg[k.strip()] = v.strip()
    return cfg

def _error_code(e):
    if isinstance(e, ClientError):
        return e.response.get('Error',{}).get('Code','')
    return type(e).__name__

def cw_logs_enabled(cfg):
    if cfg.get('DISABLE_CW_LOGS','').lower() == 'true':
        return False
    return bool(cfg.get('CW_LOG_GROUP') and cfg.get('CW_LOG_STREAM') and cfg.get('REGION'))

def _ensure_log_stream(logs, log_group, log_stream):
    # both calls fail with ResourceAlreadyExistsException after the first boot
    try:
        logs.create_log_group(logGroupName=log_group)
    except ClientError:
        pass
    try:
        logs.create_log_stream(logGroupName=log_group, logStreamName=log_stream)
    except ClientError:
        pass

def log_to_cw(message, cfg):
    if not cw_logs_enabled(cfg):
        return
    log_group = cfg['CW_LOG_GROUP']
    log_stream = cfg['CW_LOG_STREAM']
    try:
        logs = boto3.client('logs', region_name=cfg['REGION'])
        _ensure_log_stream(logs, log_group, log_stream)
        ts = int(time.time() * 1000)
        logs.put_log_events(
            logGroupName=log_group,
            logStreamName=log_stream,
            logEvents=[{'timestamp': ts, 'message': message}],
        )
    except (ClientError, BotoCoreError) as e:
        print(f"[LogFallback] {message} ({_error_code(e)})", file=sys.stderr)

def send_cw_metric(value, cfg):
    if not (cfg.get('CW_METRIC_NAMESPACE') and cfg.get('CW_METRIC_NAME') and cfg.get('REGION')):
        return
    try:
        cw = boto3.client('cloudwatch', region_name=cfg['REGION'])
        cw.put_metric_data(
            Namespace=cfg['CW_METRIC_NAMESPACE'],
            MetricData=[{
                'MetricName': cfg['CW_METRIC_NAME'],
                'Value': float(value)
            }]
        )
    except (ClientError, BotoCoreError) as e:
        print(f"[MetricFallback] {cfg['CW_METRIC_NAMESPACE']}/{cfg['CW_METRIC_NAME']}={value} ({_error_code(e)})", file=sys.stderr)
